"""
govledger package initializer

Keep this module lightweight. Do not import FastAPI or the runtime here,
so library users of gov_runtime do not pay for the HTTP stack.
"""

__all__ = []
