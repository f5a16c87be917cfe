"""
jsonmend demonstration script.
"""

import logging

import jsonmend
from jsonmend import ParseConfig


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("jsonmend - JSON Recovery for Model Output Demo")
    print("=" * 40)

    examples = [
        # Already valid
        ('{"term": "Vector", "related": ["scalar", "matrix"]}', "Valid JSON"),
        # Markdown fence and prose
        (
            'Here you go:\n```json\n{"term": "Limit", "emoji": "\U0001f4c8"}\n```\nEnjoy!',
            "Fenced completion with commentary",
        ),
        # Single-backslash LaTeX
        (r'{"definition": "A scalar $\lambda$ with $A\mathbf{v} = \lambda\mathbf{v}$"}', "LaTeX commands"),
        # Raw newline inside a string
        ('{"analogy": "First line\nSecond line"}', "Literal newline in a string"),
        # Cut off by the token budget
        ('{"context": {"summary": "Let $\\theta$ vary", "related": ["angle", "rad', "Truncated output"),
        # Nothing to recover
        ("Sorry, I can't help with that.", "Refusal"),
    ]

    for i, (text, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {text.strip()}")

        outcome = jsonmend.parse_outcome(text)
        if outcome.ok:
            print(f"Output: {outcome.value} ({outcome.method.value})")
        else:
            print(f"Failed: {outcome.failure.value} - {outcome.diagnostic}")

    # Field lookup that tolerates renamed and nested keys
    print(f"\n{len(examples) + 1}. Field resolution")
    data = jsonmend.parse('{"Term": "Derivative", "details": {"EXPLANATION": "Rate of change"}}')
    print(f"term:        {jsonmend.resolve_field(data, ['term', 'Term'])}")
    print(f"explanation: {jsonmend.resolve_field(data, ['explanation'])}")

    # Strict mode accepts only valid JSON
    print(f"\n{len(examples) + 2}. Strict mode")
    outcome = jsonmend.parse_outcome('{"a": [1, 2', ParseConfig(strict=True))
    print(f"Failed: {outcome.failure.value}")


if __name__ == "__main__":
    main()
