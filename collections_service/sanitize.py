def sanitize_string(text):
    """Flatten newlines, drop escaped quotes and trim surrounding whitespace."""
    if not text:
        return ""
    text = text.replace("\n", " ")
    # removing one \" can join the characters around it into another
    while '\\"' in text:
        text = text.replace('\\"', "")
    return text.strip()
