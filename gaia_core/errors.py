"""
Error handling utilities for the GaiaScript compiler.
"""


class GaiaCompileError(Exception):
    """Base exception for GaiaScript compilation errors with line numbers and hints."""
    def __init__(self, message, line_number=None, column=None, context=None, suggestion=None):
        self.message = message
        self.line_number = line_number
        self.column = column
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        super().__init__(self._format_error())

    def _format_error(self):
        """Format the error message with context and suggestion."""
        lines = [self.message]
        if self.line_number:
            location = f" at line {self.line_number}"
            if self.column:
                location += f", column {self.column}"
            lines[0] += location
        if self.context:
            lines.append(f"   > {self.context}")
        if self.suggestion:
            lines.append(f"   hint: {self.suggestion}")
        return "\n".join(lines)


class DecodeError(GaiaCompileError, ValueError):
    """Malformed vector numeral text."""
    def __init__(self, text, offending=None, reason=None):
        self.text = text
        self.offending = offending if offending is not None else text
        detail = reason or f"invalid numeral glyph '{self.offending}'"
        super().__init__(f"Cannot decode '{text}': {detail}")


class ParseError(GaiaCompileError):
    """Grammar violation. Fatal: the compile aborts on the first one."""
    def __init__(self, expected, token, context=None, suggestion=None):
        self.expected = expected
        self.token = token
        got = token.kind.name if token.text == "" else f"{token.kind.name} '{token.text}'"
        super().__init__(
            f"Expected {expected}, got {got}",
            line_number=token.line,
            column=token.column,
            context=context,
            suggestion=suggestion,
        )


class EmissionError(GaiaCompileError):
    """A target construct with no rendering rule for the selected target."""
    def __init__(self, kind, target):
        self.kind = kind
        self.target = target
        super().__init__(f"No {target} rendering rule for {kind}")


class StyleError(GaiaCompileError):
    """Style declarations that the style grammar rejects."""
    def __init__(self, style_text, detail, line_number=None):
        self.style_text = style_text
        super().__init__(f"Invalid style block '{style_text}': {detail}", line_number=line_number)


def get_line_context(source_code, line_number):
    """Extract the line of code from source by line number (1-based)."""
    if not source_code or line_number is None:
        return None
    source_lines = source_code.split('\n')
    if 0 < line_number <= len(source_lines):
        return source_lines[line_number - 1].strip()
    return None


FENCED = {'函': 'function', '組': 'component', '界': 'interface'}


def detect_common_error_patterns(source_code):
    """Detect common mistakes and return a helpful suggestion (or None)."""
    # Unmatched delimiters
    for opening, closing in (('⟨', '⟩'), ('⟦', '⟧'), ('{', '}')):
        open_count = source_code.count(opening)
        close_count = source_code.count(closing)
        if open_count != close_count:
            return f"Unmatched delimiters: found {open_count} '{opening}' but {close_count} '{closing}'"

    # Declarations need a closing fence that repeats the keyword
    for glyph, name in FENCED.items():
        opened = source_code.count(glyph + '⟨')
        closed = source_code.count('⟨' + glyph + '⟩') + source_code.count('⟨/' + glyph + '⟩')
        if opened > closed:
            return f"Every {name} needs a closing fence: end it with '⟨/{glyph}⟩'"

    return None
