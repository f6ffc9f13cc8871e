"""Connectors — adapters de borda para serviços externos.

Estrutura:
- streamlabs/: origem das doações (socket em tempo real e webhook)
- streamelements/: destino (API de registro de gorjetas)
- exchange_rates/: fonte da tabela de câmbio

Cada serviço tem seu próprio connector, garantindo isolamento de falhas.
"""

__all__: list[str] = []
