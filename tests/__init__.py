"""Test suite for the attestation report pipeline."""
