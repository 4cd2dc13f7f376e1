"""
Pointer Tremor Stabilizer

Smooths a noisy pointer stream with a One Euro Filter so that hand tremor
does not reach the cursor, while keeping lag low.
"""

__version__ = "0.1.0"
__author__ = "Pointer Stabilizer Team"

# Global debug flag - set to True to print every parsed sample
DEBUG = False
