"""
Console report of an agent response, including proof that the Code Interpreter tool actually ran.
"""

CODE_INTERPRETER_CALL = "code_interpreter_call"

RULE = "─" * 60
INNER_RULE = "  " + "─" * 50


def _field(item, name: str):
    """Read `name` from an SDK model or a plain dict; missing or empty values become "N/A"."""
    value = item.get(name) if isinstance(item, dict) else getattr(item, name, None)
    return "N/A" if value is None or value == "" else value


def indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line for line in text.split("\n"))


def print_code_interpreter_call(item) -> None:
    print("\n✓ CODE INTERPRETER WAS USED!")
    print(f"  Container ID: {_field(item, 'container_id')}")
    print(f"  Code Interpreter ID: {_field(item, 'id')}")

    code = item.get("code") if isinstance(item, dict) else getattr(item, "code", None)
    if code:
        print("\n  Python Code Executed:")
        print(INNER_RULE)
        print(indent(code))
        print(INNER_RULE)

    outputs = (item.get("outputs") if isinstance(item, dict) else getattr(item, "outputs", None)) or []
    for output in outputs:
        kind = _field(output, "type")
        if kind == "logs":
            print("\n  Execution Logs:")
            print(indent(_field(output, "logs"), prefix="    "))
        elif kind == "image":
            print(f"\n  Generated Image: {_field(output, 'url')}")


def print_response(response) -> bool:
    """
    Print the agent answer and walk its output items.

    Returns True if at least one output item was a Code Interpreter call.
    """
    print("AGENT RESPONSE:")
    print(RULE)
    print(getattr(response, "output_text", None) or "")
    print(RULE)

    print("\nRESPONSE ANALYSIS (Proof of Code Interpreter):")
    print(RULE)

    output = getattr(response, "output", None)
    code_interpreter_used = False
    if isinstance(output, list):
        for item in output:
            kind = _field(item, "type")
            print(f"Output type: {kind}")
            if kind == CODE_INTERPRETER_CALL:
                code_interpreter_used = True
                print_code_interpreter_call(item)

        if not code_interpreter_used:
            print("\nNo code_interpreter_call found in output.")

    print("\nFull Response Structure:")
    print(f" - Response ID: {_field(response, 'id')}")
    print(f" - Model: {_field(response, 'model')}")
    print(f" - Output items: {len(output) if isinstance(output, list) else 0}")

    usage = getattr(response, "usage", None)
    if usage is not None:
        print(f" - Input tokens: {_field(usage, 'input_tokens')}")
        print(f" - Output tokens: {_field(usage, 'output_tokens')}")

    return code_interpreter_used
