"""🎨 UI-шар: статичні тексти та форматери повідомлень."""
