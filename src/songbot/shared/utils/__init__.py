"""🧰 Дрібні утиліти: логування, ретраї, форматування, файли."""
