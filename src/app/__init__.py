"""App — orquestração do painel: serviços, infraestrutura e bootstrap.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de evento do calendário
- services/: decoder ICS e serviço do feed
- infra/: implementações concretas de IO (HTTP, feed ICS)
- protocols/: contratos/interfaces
- observability/: correlation id e access log

Padrão: app executa; api adapta; config configura; utils apoia.
"""
