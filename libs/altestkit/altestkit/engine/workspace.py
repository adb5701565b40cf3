"""Disposable in-memory workspace holding the projects of one test case.

Nothing is persisted.  The workspace is a context manager; on exit every
project and document is released and any further use raises
``WorkspaceError``.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from altestkit.errors import WorkspaceError

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


@dataclass(frozen=True)
class Document:
    """A single source document of a project."""

    id: int
    project_id: int
    name: str
    text: str


@dataclass
class Project:
    """A minimal project: name, language, references and documents."""

    id: int
    name: str
    language: str = "AL"
    references: tuple[str, ...] = ()
    documents: dict[int, Document] = field(default_factory=dict)


@dataclass(frozen=True)
class ProjectInfo:
    """Everything needed to add a project to a workspace."""

    name: str
    language: str = "AL"
    references: tuple[str, ...] = ()


class AdhocWorkspace:
    """A workspace that allows full manipulation of projects and documents."""

    def __init__(self, kind: str = "Custom") -> None:
        self.kind = kind
        self._projects: dict[int, Project] = {}
        self._open_documents: set[int] = set()
        self._disposed = False
        logger.debug("Created %s workspace", kind)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def __enter__(self) -> AdhocWorkspace:
        self._check_alive()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def dispose(self) -> None:
        """Release all projects and documents. Safe to call twice."""
        if self._disposed:
            return
        self.clear_solution()
        self._disposed = True
        logger.debug("Disposed %s workspace", self.kind)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _check_alive(self) -> None:
        if self._disposed:
            raise WorkspaceError("Workspace has been disposed")

    # ------------------------------------------------------------------
    # Solution
    # ------------------------------------------------------------------

    @property
    def projects(self) -> list[Project]:
        self._check_alive()
        return list(self._projects.values())

    def clear_solution(self) -> None:
        """Remove all projects and documents from the workspace."""
        self._check_alive()
        self._projects.clear()
        self._open_documents.clear()

    def add_project(self, info: ProjectInfo | str, language: str = "AL") -> Project:
        """Add a project. All previous projects remain intact."""
        self._check_alive()
        if isinstance(info, str):
            info = ProjectInfo(info, language)
        if not info.name:
            raise ValueError("Project name must not be empty")
        project = Project(next(_ids), info.name, info.language, tuple(info.references))
        self._projects[project.id] = project
        logger.debug("Added project %r (%s)", project.name, project.language)
        return project

    def add_projects(self, infos: Iterable[ProjectInfo]) -> list[Project]:
        """Add several projects at once."""
        return [self.add_project(info) for info in infos]

    def get_project(self, project_id: int) -> Project:
        self._check_alive()
        try:
            return self._projects[project_id]
        except KeyError:
            raise WorkspaceError(f"Unknown project id {project_id}") from None

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def add_document(self, project_id: int, name: str, text: str) -> Document:
        """Add a document to the project with id *project_id*."""
        if not name:
            raise ValueError("Document name must not be empty")
        if text is None:
            raise ValueError("Document text must not be None")
        project = self.get_project(project_id)
        document = Document(next(_ids), project.id, name, text)
        project.documents[document.id] = document
        return document

    def get_document(self, document_id: int) -> Document:
        self._check_alive()
        for project in self._projects.values():
            if document_id in project.documents:
                return project.documents[document_id]
        raise WorkspaceError(f"Unknown document id {document_id}")

    def with_text(self, document_id: int, text: str) -> Document:
        """Replace the text of a document and return the updated document."""
        document = self.get_document(document_id)
        updated = replace(document, text=text)
        self._projects[document.project_id].documents[document_id] = updated
        return updated

    def open_document(self, document_id: int) -> None:
        """Put the document into the open state."""
        self.get_document(document_id)
        self._open_documents.add(document_id)

    def close_document(self, document_id: int) -> None:
        """Put the document into the closed state."""
        self.get_document(document_id)
        self._open_documents.discard(document_id)

    def is_open(self, document_id: int) -> bool:
        self._check_alive()
        return document_id in self._open_documents
