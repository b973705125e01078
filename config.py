"""Configuration constants for the Bomb Party Bot."""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Game defaults
DEFAULT_TARGET = 30  # points needed to win
DEFAULT_HEALTH = 5
DEFAULT_TIMEOUT = 15  # seconds per turn
MAX_TIMEOUT = 120
MAX_TARGET = 1000

# Relative weights of the bigram, trigram and quadgram pools
DEFAULT_WEIGHTS = (15, 70, 15)
POOL_NAMES = ('Bigrams', 'Trigrams', 'Quadgrams')

# Word data
WORD_DATA_DIR = os.getenv("WORD_DATA_DIR", "res")
DICTIONARY_FILE = os.getenv("DICTIONARY_FILE", "dict.txt")
BIGRAMS_FILE = os.getenv("BIGRAMS_FILE", "bigrams.txt")
TRIGRAMS_FILE = os.getenv("TRIGRAMS_FILE", "trigrams.txt")
QUADGRAMS_FILE = os.getenv("QUADGRAMS_FILE", "quadgrams.txt")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")
LOG_FORMAT = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
