"""
Browser front end for RagRouter: FastAPI backend and Gradio chat page.
"""
