"""
PricePinion: coleta de produtos de supermercados e reconciliação do catálogo.
"""

__version__ = "0.1.0"
