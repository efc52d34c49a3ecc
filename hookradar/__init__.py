"""hook-radar: Vault Radar secret scanning for agent hook frameworks"""

__version__ = "0.3.0"
