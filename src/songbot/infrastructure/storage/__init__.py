"""💾 Персистентні сховища."""
