"""🤖 Telegram-шар: обробники команд, канал доставки, тексти інтерфейсу."""
