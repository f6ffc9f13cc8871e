"""Normalizers por origem — conversão de payloads externos para modelos internos.

Estrutura:
- streamlabs/: eventos de doação (socket e webhook)
"""

from .streamlabs import StreamlabsNormalizer

__all__ = ["StreamlabsNormalizer"]
