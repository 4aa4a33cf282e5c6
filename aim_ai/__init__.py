# aim_ai/__init__.py
from dotenv import load_dotenv, find_dotenv

# Prefer the current working directory first; fall back to walking up
path = find_dotenv(usecwd=True) or find_dotenv()
load_dotenv(path)

__version__ = "0.1.0"
