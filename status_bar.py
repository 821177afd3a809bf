def render_status(context, width):
    """
    context keys: mode, command_buffer, error, message, focus, count
    """
    if context.get("mode") == "Command":
        text = f":{context.get('command_buffer', '')}"
    elif context.get("error"):
        text = context["error"]
    elif context.get("message"):
        text = context["message"]
    else:
        text = f"--{context.get('focus', 'Table')}--"
        if context.get("mode") == "Text":
            text += " INSERT"

    line = text.ljust(width)[:width]
    count = context.get("count") or 0
    if count and context.get("mode") != "Command":
        count_text = str(count)
        x = (width * 3) // 4
        if x + len(count_text) <= width and x >= len(text):
            line = line[:x] + count_text + line[x + len(count_text) :]
    return line


def status_context(editor):
    return {
        "mode": editor.mode.value,
        "command_buffer": editor.command.get_buffer(),
        "error": editor.error,
        "message": editor.message,
        "focus": editor.doc.focus.value,
        "count": editor.pending_count,
    }
