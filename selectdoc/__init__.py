"""selectdoc package.

This package generates docstrings for highlighted code with a locally
running chat model, including:
- Few-shot prompt templates for Python and Java, with a generic fallback
- Cleaning of model replies (reasoning spans, markdown fences)
- Extraction of the docstring block from the cleaned reply
- Atomic insertion of the result above the selection
"""

__version__ = "0.1.0"
