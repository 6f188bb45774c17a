"""Survey Example: batch prompting with validation and list prompts."""

from __future__ import annotations

import asyncio

from termask import Ask, Choice, Separator


def has_no_spaces(value: str) -> bool:
    if " " in value:
        raise ValueError("Usernames cannot contain spaces")
    return True


async def main() -> None:
    ask = Ask()
    answers = await ask.prompt(
        [
            {
                "type": "input",
                "name": "username",
                "message": "Pick a username",
                "validate": has_no_spaces,
                "max_attempts": 3,
            },
            {"type": "password", "name": "password", "message": "Password", "mask": "*"},
            {
                "type": "number",
                "name": "age",
                "message": "How old are you?",
                "min": 16,
                "max": 100,
            },
            {
                "type": "select",
                "name": "editor",
                "message": "Favorite editor?",
                "choices": [
                    "vim",
                    "emacs",
                    Separator(),
                    Choice("notepad", disabled=True),
                    {"message": "VS Code", "value": "code"},
                ],
            },
            {
                "type": "checkbox",
                "name": "languages",
                "message": "Languages you use",
                "choices": ["Python", "Go", "Rust", "TypeScript"],
            },
            {"type": "confirm", "name": "subscribe", "message": "Subscribe?", "default": True},
        ]
    )
    answers.pop("password")
    print(answers)


if __name__ == "__main__":
    asyncio.run(main())
