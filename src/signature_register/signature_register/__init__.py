"""Signature Register package.

Organized by feature modules (signatures, roster, ...) with a thin Flask
controller layer over service/repository layers.
"""
