"""
Pneuma - chain access for quadfund.

Transport, transaction building, the signing client, the faucet bootstrap
and the network session that ties them to a key file.
"""
