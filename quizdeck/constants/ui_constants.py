"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizDeck"
SET_LIST_REFRESH_INTERVAL_MS: int = 1000
DEFAULT_UI_FONT_SIZE: int = 10
DEFAULT_QUESTION_FONT_SIZE: int = 14

TOOLBAR_NEW_SET: str = "New Set"
TOOLBAR_EDIT_SET: str = "Edit Set"
TOOLBAR_DELETE_SET: str = "Delete Set"
TOOLBAR_IMPORT: str = "Import Set"
TOOLBAR_EXPORT: str = "Export Set"
TOOLBAR_PASTE_IMPORT: str = "Import from Text"
TOOLBAR_SHOW_JSON: str = "Show JSON"
TOOLBAR_START: str = "Start"

SESSION_PREVIOUS: str = "Previous"
SESSION_CHECK: str = "Check Answer"
SESSION_NEXT: str = "Next"
SESSION_FINISH: str = "Finish"
SESSION_BACK_TO_SETS: str = "Back to Sets"
SESSION_MULTIPLE_CHOICE_HINT: str = "Multiple answers are correct."
SESSION_SAVE_FAILED_TEMPLATE: str = "Progress not saved: {error}"

SUMMARY_TITLE: str = "Set Summary"
SUMMARY_SCORE_TEMPLATE: str = "{correct} / {total} correct"
SUMMARY_PERCENTAGE_TEMPLATE: str = "{percentage}% score"
SUMMARY_REVIEW_INCORRECT_TEMPLATE: str = "Review Incorrect Questions ({count})"
SUMMARY_RESET: str = "Start Over (Reset Progress)"
SUMMARY_SHOW_ALL: str = "Show All Questions"
SUMMARY_GOOD_SCORE_THRESHOLD: int = 70
SUMMARY_ALL_PERFECT: str = "Every question in this pass was answered correctly."
SUMMARY_WITH_ERRORS: str = "Some answers in this pass were incorrect."

EDITOR_NAME_PLACEHOLDER: str = "Set name"
EDITOR_QUESTION_PLACEHOLDER: str = "Question text (supports Markdown + LaTeX)."
EDITOR_ANSWER_PLACEHOLDER: str = "Answer text"
EDITOR_ADD_ANSWER: str = "Add Answer"
EDITOR_REMOVE_ANSWER: str = "Remove Last Answer"
EDITOR_SAVE_QUESTION: str = "Save Question"
EDITOR_NEW_QUESTION: str = "New Question"
EDITOR_DELETE_QUESTION: str = "Delete Question"
EDITOR_SAVE_SET: str = "Save Set"
EDITOR_CANCEL: str = "Cancel"

SET_CARD_TEMPLATE: str = "{name}  ({count} question(s), {completed}% answered)"
NO_SET_SELECTED_MESSAGE: str = "Select a quiz set first."
EMPTY_SET_MESSAGE: str = "This set has no questions yet. Edit it to add some."

IMPORT_DIALOG_TITLE: str = "Select quiz set file"
IMPORT_FILE_FILTER: str = "Quiz sets (*.json *.txt);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Export quiz set"
EXPORT_FILE_FILTER: str = "JSON (*.json);;Plain text (*.txt)"

PASTE_IMPORT_DIALOG_TITLE: str = "Import quiz set from JSON text"
SHOW_JSON_DIALOG_TITLE: str = "Quiz set JSON"
JSON_DIALOG_PLACEHOLDER: str = "Paste a quiz set JSON document here."
JSON_DIALOG_IMPORT: str = "Import"
JSON_DIALOG_CANCEL: str = "Cancel"
JSON_DIALOG_COPY: str = "Copy to Clipboard"
JSON_DIALOG_CLOSE: str = "Close"
JSON_DIALOG_COPIED: str = "Copied to the clipboard."
