"""증명 검사기 패키지(Attestation checker package)."""
