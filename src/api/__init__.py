"""API — camada de borda e adapters de origem/destino.

Responsabilidades:
- Receber eventos externos (socket Streamlabs, webhook HTTP)
- Normalizar payloads brutos para o registro canônico
- Construir payloads para a API de gorjetas
- Falar HTTP com serviços externos (gorjetas e câmbio)

Subpastas:
- connectors/: adapters de IO por serviço
- normalizers/: payloads externos -> DonationRecord
- payload_builders/: DonationRecord -> payload da API de gorjetas
- routes/: endpoints HTTP (status, health, webhook)

NÃO PODE conter: dedupe, conversão de moeda, cadeia de fallback.
"""
