"""Attestation report pipeline source root."""
