"""🏗️ Інфраструктурний шар: API, сховища, музичний пайплайн."""
