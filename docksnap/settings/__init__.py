"""Подсистема настроек подключения и логирования."""
