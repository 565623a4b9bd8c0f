"""순위 목록 수집기 애플리케이션(Ranked package lister application)."""
