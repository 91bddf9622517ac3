from .main import englishFromList, scriptPath
from .options import EMPTY_ELEMENT_SUFFIXES, Options
