"""증명 검사기 애플리케이션(Attestation checker application)."""
