"""🧠 Доменний шар songbot."""
