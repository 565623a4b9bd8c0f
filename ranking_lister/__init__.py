"""순위 목록 수집기 패키지(Ranked package lister package)."""
