"""API — camada de borda HTTP do painel.

Subpastas:
- routes/: endpoints HTTP (calendar, health)

NÃO PODE conter: parsing de ICS, regras de filtro, acesso direto a providers.
"""
