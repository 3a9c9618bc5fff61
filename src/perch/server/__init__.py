"""Server side: ASGI dispatch, response sending, and process lifecycle."""
