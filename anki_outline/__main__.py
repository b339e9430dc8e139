# Path: anki_outline/__main__.py
from anki_outline.main import main

main()
