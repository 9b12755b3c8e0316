"""
IPMI Discovery Module

A Python module that sweeps a subnet for IPMI baseboard management controllers,
escalating from ping to port probes to an authenticated IPMI handshake.
"""

__version__ = "1.0.0"
__author__ = "Network Discovery Team"
