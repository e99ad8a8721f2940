"""Работа с Docker-демоном: клиент, снимок состояния и тома."""
