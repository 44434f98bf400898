"""
Resume template catalog.

Templates are read-only reference data kept in the resume_templates table. When
the table cannot be read, is empty, or lacks the requested id, the fallback
catalog in default_templates.yaml is served instead.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from vitae.contexts.drafting.logger import _log_debug, _log_warning
from vitae.contexts.persistence.store import PersistenceError, ResumeStore

DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "default_templates.yaml"

# Order used when a template does not define one
DEFAULT_SECTION_ORDER = ["header", "summary", "experience", "education", "skills"]


@dataclass
class ResumeTemplate:
    """
    Visual/layout configuration applied to a resume preview.

    Attributes:
        id: Template identifier (e.g., "classic-professional")
        name: Display name
        description: Short description
        thumbnail_url: Preview image URL
        content: {layout, style{colors, typography, spacing}, sections{order, config}}
        is_premium: Whether the template is a premium offering
    """

    id: str
    name: str
    description: str = ""
    thumbnail_url: str = ""
    content: Dict[str, Any] = field(default_factory=dict)
    is_premium: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeTemplate":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description") or "",
            thumbnail_url=data.get("thumbnail_url") or "",
            content=data.get("content") or {},
            is_premium=bool(data.get("is_premium", False)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "thumbnail_url": self.thumbnail_url,
            "content": self.content,
            "is_premium": self.is_premium,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @property
    def layout(self) -> str:
        return self.content.get("layout", "single-column")

    @property
    def style(self) -> Dict[str, Any]:
        return self.content.get("style", {})

    @property
    def section_order(self) -> List[str]:
        return list(self.content.get("sections", {}).get("order") or DEFAULT_SECTION_ORDER)

    def section_config(self, section: str) -> Dict[str, Any]:
        return self.content.get("sections", {}).get("config", {}).get(section, {})

    def is_section_visible(self, section: str) -> bool:
        return bool(self.section_config(section).get("visible", True))

    def visible_sections(self) -> List[str]:
        """Sections to render, in template order."""
        return [section for section in self.section_order if self.is_section_visible(section)]


def load_default_templates(config_path: Path = None) -> List[ResumeTemplate]:
    """
    Load the fallback catalog from YAML.

    Args:
        config_path: Optional path override (defaults to default_templates.yaml)

    Returns:
        Templates in file order
    """
    if config_path is None:
        config_path = DEFAULT_TEMPLATES_PATH

    catalog = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    return [ResumeTemplate.from_dict({"id": template_id, **data}) for template_id, data in catalog.items()]


def get_resume_templates(store: Optional[ResumeStore] = None) -> List[ResumeTemplate]:
    """
    List templates from the store, falling back to the default catalog.

    Args:
        store: Table store (None means the store is unavailable)

    Returns:
        Stored templates newest first, or the defaults
    """
    if store is None:
        return load_default_templates()

    try:
        rows = store.list_templates()
    except PersistenceError as e:
        _log_warning(f"Error fetching templates, returning defaults: {e.message}")
        return load_default_templates()

    if not rows:
        _log_debug("No templates found in database, returning defaults")
        return load_default_templates()

    _log_debug(f"Retrieved {len(rows)} templates from database")
    return [ResumeTemplate.from_dict(row) for row in rows]


def get_template_by_id(
    template_id: str, store: Optional[ResumeStore] = None
) -> Optional[ResumeTemplate]:
    """
    Look up one template, trying the store first and the defaults second.

    Returns:
        The template, or None if neither source has it
    """
    if store is not None:
        try:
            row = store.get_template(template_id)
        except PersistenceError as e:
            _log_warning(f"Error fetching template {template_id}: {e.message}")
            row = None
        if row is not None:
            return ResumeTemplate.from_dict(row)

    for template in load_default_templates():
        if template.id == template_id:
            return template
    return None


def seed_default_templates(store: ResumeStore, overwrite: bool = False) -> List[str]:
    """
    Write the default catalog into the store.

    Args:
        store: Table store
        overwrite: Replace templates that already exist

    Returns:
        Ids of templates written
    """
    written = []
    for template in load_default_templates():
        if not overwrite and store.get_template(template.id) is not None:
            continue
        store.upsert_template(template.to_dict())
        written.append(template.id)
    return written
