"""
signup — user sign-up validation on a railway.

Checks name, e-mail, age and an optional home directory, stopping at the
first rejected rule. Built on the railway toolkit: Result values, stage
adapters and pipe().
"""

__version__ = "0.1.0"
