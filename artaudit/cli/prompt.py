def ask(prompt: str) -> str:
    """Reads one answer from the terminal. End of input counts as quit."""
    try:
        return input(prompt)
    except EOFError:
        print()
        return "q"
