"""Static metadata describing QuizDeck."""

APP_NAME = "QuizDeck"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizDeck is a self-test companion built with Qt and FastAPI. "
    "Build sets of multiple-choice questions with Markdown and LaTeX, work through them at your own pace, "
    "and review only the questions you got wrong."
)

HELP_TEXT = (
    "Pick a set and press Start. Select an answer and press Check Answer; questions with several correct "
    "answers let you select more than one, and only an exact match counts as correct.\n\n"
    "Progress is saved as you move between questions, so you can close a set and continue later. "
    "From the summary you can review only the incorrect questions or start over.\n\n"
    "Import from Text accepts a pasted JSON document, and Show JSON displays a set's JSON for copying.\n\n"
    "Sets can be imported from JSON exports or from a .txt file in this format:\n\n"
    "NAME: Geometry\n\n"
    "Q: What is $30^o$ in radians?\n"
    "A: \\frac{\\pi}{2}\nB: \\frac{\\pi}{6}\nC: \\frac{\\pi}{3}\n"
    "CORRECT: B\n\n"
    "Q: Which angles are acute?\n"
    "A: $30^o$\nB: $89^o$\nC: $90^o$\n"
    "CORRECT: A, B"
)
