"""Infrastructure layer — document parsing and selector matching.

This layer wraps third-party libs (BeautifulSoup4, soupsieve) behind a
small Selection API.  It must never import from services, commands, or output.
"""
