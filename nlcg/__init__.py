"""Smearing kernels, dense linear algebra and preconditioners for Kohn-Sham free-energy minimisation."""

__version__ = "0.8.0"