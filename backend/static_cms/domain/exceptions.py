"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StaticBuildError(Exception):
    """Base class for failures while generating a static artifact.

    Also raised directly when an unexpected error interrupts a build, so
    callers only ever need to handle this hierarchy plus EntityNotFoundError.
    """


class EntityNotPublishedError(StaticBuildError):
    """Raised when an entity exists but is not eligible for static generation."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' is not published")


class TemplateError(StaticBuildError):
    """Raised when a theme or template cannot produce output."""


class ThemeNotFoundError(TemplateError):
    """Raised when the active theme directory does not exist."""

    def __init__(self, theme: str):
        self.theme = theme
        super().__init__(f"Theme '{theme}' not found")


class TemplateNotFoundError(TemplateError):
    """Raised when a template is missing from the active theme."""

    def __init__(self, theme: str, template: str):
        self.theme = theme
        self.template = template
        super().__init__(f"Template '{template}' not found in theme '{theme}'")


class TemplateRenderError(TemplateError):
    """Raised when a template fails while rendering."""

    def __init__(self, template: str, message: str):
        self.template = template
        super().__init__(f"Failed to render '{template}': {message}")


class StaticWriteError(StaticBuildError):
    """Raised when a static file cannot be written to the output root."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Failed to write '{path}': {message}")


class InvalidRetentionError(Exception):
    """Raised when a log purge would drop records younger than the retention floor."""

    def __init__(self, days: int, minimum: int):
        self.days = days
        self.minimum = minimum
        super().__init__(f"Build logs must be kept for at least {minimum} days (got {days})")


class ThemeSwitchError(Exception):
    """Raised when the requested theme cannot become the active theme."""
