"""
Sigil - Wallet credentials for Quadfund.

HD wallet derivation, password-encrypted key file, and the
load-or-create provisioning step used by every session.
"""
