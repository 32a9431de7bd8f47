"""
Outer surface — payload schemas and the solar-finance command line.
"""
