"""Exception types raised by the formgen pipeline."""


class FormgenError(Exception):
    """Base class for all formgen errors."""


class TemplateValueError(FormgenError, ValueError):
    """A property declares a type outside {number, string, boolean}.

    Fatal: raised while synthesizing the owning entity and aborts the run.
    """

    def __init__(self, prop_name: str, prop_type):
        self.prop_name = prop_name
        self.prop_type = prop_type
        super().__init__(
            f"out of range: property '{prop_name}' has unsupported type '{prop_type}' "
            f"(expected number, string or boolean)"
        )


class InputError(FormgenError, ValueError):
    """Malformed entity-form document (YAML/JSON input)."""


class FormatterError(FormgenError):
    """External formatter could not be run or rejected the generated text."""
