"""
Prompt builder for few-shot docstring generation prompts.

This module turns a highlighted snippet into the prompt sent to the local
chat model. Python and Java get two worked examples each, which anchors the
output format; every other language gets a single zero-shot instruction.
"""

from typing import Callable, Dict

from ..models.source_snippet import JAVA, PYTHON, normalize_language

PYTHON_EXAMPLES = '''Example 1:

"""
Converts Celsius temperature to Fahrenheit.

Args:
    celsius (float): Temperature in Celsius.

Returns:
    float: Temperature in Fahrenheit.
"""
def celsius_to_fahrenheit(celsius):
    return (celsius * 9/5) + 32

Example 2:

"""
Returns the larger of two numbers.

Args:
    a (int): First number.
    b (int): Second number.

Returns:
    int: The greater of a and b.
"""
def max_of_two(a, b):
    return a if a > b else b'''

JAVA_EXAMPLES = """Example 1:

/**
 * Calculates the factorial of a number.
 *
 * @param n the number
 * @return the factorial of n
 */
public int factorial(int n) {
    if (n <= 1) return 1;
    return n * factorial(n - 1);
}

Example 2:

/**
 * Checks if a number is even.
 *
 * @param n the number to check
 * @return true if the number is even, false otherwise
 */
public boolean isEven(int n) {
    return n % 2 == 0;
}"""


def python_prompt(code: str) -> str:
    """Few-shot prompt producing a triple-quoted Python docstring."""
    prompt_parts = [
        "Below are two examples of Python functions with well-written docstrings.",
        "Generate a similar docstring for the third function.",
        "ONLY RETURN THE DOCSTRING TEXT.",
        "No function definition or surrounding explanations.",
        "Do not include any surrounding explanations or the original code.",
        (
            "Everything should be in the comment block (triple quotes), "
            "including parameters."
        ),
        "",
        PYTHON_EXAMPLES,
        "",
        "Your Turn:",
        code,
    ]
    return "\n".join(prompt_parts) + "\n"


def java_prompt(code: str) -> str:
    """Few-shot prompt producing a JavaDoc block comment."""
    prompt_parts = [
        "Below are two examples of Java methods with well-written JavaDoc comments.",
        "Write a similar comment for the third method.",
        "Only return the comment text.",
        "Do not include any surrounding explanations or the original code.",
        (
            "Everything should be in the comment block (everything must be "
            "in /** */), including the parameters."
        ),
        "",
        JAVA_EXAMPLES,
        "",
        "Your Turn:",
        code,
    ]
    return "\n".join(prompt_parts) + "\n"


def default_prompt(code: str) -> str:
    """Zero-shot prompt for languages without an extraction pattern."""
    return (
        "Provide a concise and informative docstring for the following code. "
        "Return ONLY the docstring text enclosed in the appropriate "
        "language-specific delimiters. Do not include any surrounding "
        f"explanations or the original code:\n{code}"
    )


PROMPT_TEMPLATES: Dict[str, Callable[[str], str]] = {
    PYTHON: python_prompt,
    JAVA: java_prompt,
}


def select_prompt(language: str, code: str) -> str:
    """
    Build the prompt for a snippet written in the given language.

    Parameters
    ----------
    language : str
        Host language identifier. Anything other than 'python' or 'java'
        (case-insensitive) selects the generic template.
    code : str
        The highlighted source code, inserted verbatim.

    Returns
    -------
    str
        The complete prompt text. Never raises.
    """
    template = PROMPT_TEMPLATES.get(normalize_language(language), default_prompt)
    return template(code)


class PromptBuilder:
    """
    Builder for docstring generation prompts.

    Parameters
    ----------
    templates : dict, optional
        Mapping of language tag to template function. Entries override or
        extend the built-in PROMPT_TEMPLATES.
    """

    def __init__(self, templates: Dict[str, Callable[[str], str]] | None = None):
        self.templates = dict(PROMPT_TEMPLATES)
        if templates:
            self.templates.update(templates)

    def build_prompt(self, code: str, language: str) -> str:
        """
        Build a documentation generation prompt.

        Parameters
        ----------
        code : str
            The highlighted code to document.
        language : str
            Host language identifier of the document.

        Returns
        -------
        str
            The complete prompt to send to the chat model.
        """
        tag = language.strip().lower() if language else ""
        template = self.templates.get(tag)
        if template is None:
            template = self.templates.get(normalize_language(language), default_prompt)
        return template(code)
