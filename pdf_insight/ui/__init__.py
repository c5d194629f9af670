"""NiceGUI interface - thin presentation layer over the session controller.

Responsibilities:
    - PDF upload surface (click or drag and drop)
    - Progress and error screens
    - Markdown document view and chat transcript with typing indicator

Holds no business logic; every action goes through SessionController.
"""
