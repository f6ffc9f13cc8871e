"""App — orquestração, casos de uso e infraestrutura da ponte.

Subpastas:
- bootstrap/: composition root (factories, inicialização, runtime)
- coordinators/: dispatch serial por origem
- use_cases/: relay normalize -> dedupe -> convert -> deliver
- services/: câmbio, conversão e forwarder com fallbacks
- domain/: registro canônico e tabela de câmbio
- infra/: HTTP base e cache de identidades
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
