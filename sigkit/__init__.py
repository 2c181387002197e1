"""
sigkit - split-radix FFTs and equiripple FIR filter design.
"""

__version__ = '0.1.0'
