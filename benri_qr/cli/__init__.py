"""
BenriQR - CLI
===============
Command line front end.
"""
