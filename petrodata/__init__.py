"""
PetroData Nexus: daily field operations reporting for oil wells.
"""

__version__ = "1.0.0"
