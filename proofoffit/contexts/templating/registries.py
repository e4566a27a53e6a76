from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

TYPES_PATH = Path(__file__).parent / "types"
TEMPLATE_FILENAME = "template.md.jinja"


class TemplateRegistry:
    """
    Registry for loading and caching the Jinja2 document templates.

    Templates are stored in proofoffit/contexts/templating/types/{type_name}/template.md.jinja.
    Block tags swallow their own line (trim_blocks + lstrip_blocks) so loops
    emit exactly one line per item, and the file's final newline is dropped.
    """

    def __init__(self, types_base_path: Path = None):
        """
        Args:
            types_base_path: Base path for type directories. Defaults to the
                             types/ directory shipped with this package.
        """
        self.types_base_path = Path(types_base_path) if types_base_path else TYPES_PATH
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.types_base_path)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            autoescape=False,
        )

    def get_template(self, type_name: str) -> Template:
        """
        Get a template by document type name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the template file doesn't exist
            TemplateSyntaxError: If the template has Jinja2 syntax errors
        """
        if type_name in self._cache:
            return self._cache[type_name]

        template_path = f"{type_name}/{TEMPLATE_FILENAME}"
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for type '{type_name}' at {self.types_base_path / template_path}"
            ) from e

        self._cache[type_name] = template
        return template

    def get_template_path(self, type_name: str) -> Path:
        return self.types_base_path / type_name / TEMPLATE_FILENAME

    def clear_cache(self):
        self._cache.clear()

    def is_cached(self, type_name: str) -> bool:
        return type_name in self._cache
