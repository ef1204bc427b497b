"""
High-level use cases for the clinic package.

The store orchestrates domain validation and a persistence adapter to
implement the doctor/appointment workflows. Presentation code should call
the store instead of manipulating records or storage directly.
"""
