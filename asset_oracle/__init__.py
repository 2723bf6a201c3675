"""
Asset Oracle: attestation oracle for real-world asset submissions.

Runs independent verification checks (existence, ownership, activity) against
a submitted asset claim, commits the resulting signals into one digest, signs
the digest with the oracle key, and hands the signed attestation to a ledger.
Modular layout: integrations (signal providers), verification (checks),
crypto (commitment and signer), ledger, pipeline (aggregator) and API server.
"""

__version__ = "0.1.0"
