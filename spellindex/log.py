import logging

logger = logging.getLogger("spellindex")
