"""
Multi-scale causal inference dashboard.

Simulation core (state store, stepper, particle field), snapshot
persistence, and Tkinter/headless views behind a SystemController.
"""

__version__ = "0.1.0"
