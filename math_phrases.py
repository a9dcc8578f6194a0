# Curated keyword tables for math detection.
# Extend a category list to widen fuzzy matching; "unknown" stays empty.

import re

PHRASES = {
    "arithmetic": [
        "add", "plus", "sum", "increase by",
        "subtract", "minus", "difference",
        "times", "multiply", "product",
        "divide", "over", "quotient", "per", "percent", "percentage",
    ],
    "algebra": [
        "solve for", "equation", "factor", "simplify", "expand",
        "roots of", "zeroes of", "linear equation", "quadratic", "polynomial",
    ],
    "calculus": [
        "derivative of", "differentiate", "integral of", "antiderivative",
        "limit as", "rate of change", "gradient",
    ],
    "geometry": [
        "area of", "perimeter of", "circumference", "volume of",
        "pythagorean", "slope of the line", "distance between", "triangle", "circle", "rectangle",
    ],
    "stats": [
        "mean", "median", "mode", "variance", "standard deviation",
        "probability", "distribution", "expected value",
    ],
    "triggers": [
        "calculate", "compute", "what is", "evaluate", "find",
        "how much is", "result of", "equals", "is equal to",
    ],
    "unknown": [],
}  # fmt: skip

# Symbols / LaTeX cues that almost certainly mean math
MATH_SYMBOLS = re.compile(
    r"[+\-*/×÷^=(){}\[\]<>≤≥√∑∫%]|\\(frac|sqrt|int|sum|log|ln|sin|cos|tan)", re.IGNORECASE
)

WORDY_MATH_PATTERNS = [
    re.compile(r"\bsolve\s+for\b", re.IGNORECASE),
    re.compile(r"\bwhat\s+is\b", re.IGNORECASE),
    re.compile(r"\bevaluate\b", re.IGNORECASE),
    re.compile(r"\bderivative\s+of\b", re.IGNORECASE),
    re.compile(r"\bintegral\s+of\b", re.IGNORECASE),
    re.compile(r"\blimit\s+as\b", re.IGNORECASE),
    re.compile(r"\b(area|volume|perimeter|circumference|slope|distance)\b", re.IGNORECASE),
    re.compile(
        r"\b(mean|median|mode|variance|probability|distribution|expected value)\b", re.IGNORECASE
    ),
]

NUMBER_WORDS_RE = re.compile(
    r"\b(one|two|three|four|five|six|seven|eight|nine|ten|hundred|thousand)\b", re.IGNORECASE
)
OPERATION_WORDS_RE = re.compile(
    r"\b(plus|minus|times|over|divided|product|sum|difference|power|squared|cubed|equals|equal)\b",
    re.IGNORECASE,
)

# Ordered: longer phrases must run before their sub-phrases ("is equal to" vs "equals").
LATEX_REPLACERS = [
    (re.compile(r"\bto the power of\b", re.IGNORECASE), "^"),
    (re.compile(r"\bsquared\b", re.IGNORECASE), "^2"),
    (re.compile(r"\bcubed\b", re.IGNORECASE), "^3"),
    (re.compile(r"\bsquare root of\b", re.IGNORECASE), r"\\sqrt{"),
    (re.compile(r"\bcube root of\b", re.IGNORECASE), r"\\sqrt[3]{"),
    (re.compile(r"\bplus\b", re.IGNORECASE), "+"),
    (re.compile(r"\bminus\b", re.IGNORECASE), "-"),
    (re.compile(r"\btimes\b", re.IGNORECASE), "*"),
    (re.compile(r"\bmultiply(?:\s+by)?\b", re.IGNORECASE), "*"),
    (re.compile(r"\bdivided by\b", re.IGNORECASE), "/"),
    (re.compile(r"\bover\b", re.IGNORECASE), "/"),
    (re.compile(r"\bequals\b", re.IGNORECASE), "="),
    (re.compile(r"\bis equal to\b", re.IGNORECASE), "="),
    (re.compile(r"\bderivative of\b", re.IGNORECASE), "d/dx "),
    (re.compile(r"\bintegral of\b", re.IGNORECASE), r"\\int "),
    (re.compile(r"\blimit as\b", re.IGNORECASE), r"\\lim_{x\\to } "),
    (re.compile(r"\bnatural log\b", re.IGNORECASE), "ln"),
    (re.compile(r"\blogarithm\b", re.IGNORECASE), "log"),
]

# English number words used by the normalizer
UNITS = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
}  # fmt: skip
TENS = {
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}  # fmt: skip
SCALES = {"hundred": 100, "thousand": 1_000, "million": 1_000_000, "billion": 1_000_000_000}

# Real words one edit away from a number word; never "corrected".
NOT_NUMBERS = {"forth", "fifth", "sixth", "ninth", "tenth", "eighth", "seventh", "threw", "sever"}
