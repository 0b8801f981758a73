"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import FieldType, TypeGraph
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class NameResolutionError(GeneratorError):
    """A display name handed to a renderer hook matches no record of the model."""

    pass


class FragmentShapeError(GeneratorError):
    """A default rendering did not have the shape an override relies on."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'csharp')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.cs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, graph: TypeGraph) -> str:
        """
        Generate code for every record of the graph.

        Args:
            graph: Type graph produced from a schema

        Returns:
            Generated code as a string
        """
        pass

    def graph_options(self) -> Dict[str, Any]:
        """Keyword arguments for convert_json_schema (visibility, base_type)."""
        return {}

    def validate_graph(self, graph: TypeGraph) -> List[str]:
        """
        Validate the graph for basic structural issues.

        Language generators should override this to add language-specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for record in graph:
            for prop in record.properties:
                if prop.type.kind == FieldType.ANY:
                    warnings.append(f"Untyped property {record.key}.{prop.name}")
                elif prop.type.kind == FieldType.OBJECT and prop.type.record not in graph:
                    warnings.append(
                        f"Property {record.key}.{prop.name} references unknown record "
                        f"'{prop.type.record}'"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Collapse runs of blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def lines(self) -> List[str]:
        """Generated code split into lines."""
        return self.code.splitlines()

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, graph: TypeGraph) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        graph: Type graph to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_graph(graph)
        for warning in warnings:
            logger.warning(warning)

        code = generator.generate(graph)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "record_count": len(graph),
            "top_level": graph.top_level,
            "property_count": sum(len(record.properties) for record in graph),
        }

        logger.info(
            "Generated %s code for %d records", generator.language_name, len(graph)
        )
        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
