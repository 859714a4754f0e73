"""
Theurgy - Command implementations for the quadfund CLI.

Each module groups related top-level commands:
- genesis: Provision the key file and fund it from the faucet
- deploy:  Upload and instantiate the quadratic-funding contract
- divine:  Query proposals and contract configuration
- invoke:  Create proposals, vote and trigger distribution
"""
