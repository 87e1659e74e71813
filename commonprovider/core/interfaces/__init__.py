from commonprovider.core.interfaces.provider import IProvider, IComplexDataParser

__all__ = [
    'IProvider',
    'IComplexDataParser',
]
