"""Payload builders por destino — construção de payloads para APIs externas.

Estrutura:
- streamelements/: API de gorjetas (payload completo e degradados)
"""

__all__: list[str] = []
