"""
Core value model, arithmetic primitives, and contracts.

Independent of any I/O: every operation is a pure function of its operands
and a DecimalContext.
"""
