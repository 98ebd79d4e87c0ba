"""Built-in candidate catalog."""

from __future__ import annotations

from adaptive_engine.enums import Level
from adaptive_engine.schema import CandidateItem, validate_catalog

DEFAULT_CATALOG: tuple[CandidateItem, ...] = validate_catalog(
    [
        CandidateItem(
            id="task-1",
            title="Review weekly goals",
            description="Quick check on progress and adjust priorities",
            estimated_duration=15,
            energy_required=Level.LOW,
            focus_required=Level.MEDIUM,
            category="Planning",
            priority=Level.MEDIUM,
            tags=("review", "goals", "planning"),
        ),
        CandidateItem(
            id="task-2",
            title="Write project proposal",
            description="Draft the technical requirements for the new feature",
            estimated_duration=45,
            energy_required=Level.HIGH,
            focus_required=Level.HIGH,
            category="Creative",
            priority=Level.HIGH,
            tags=("writing", "creative", "important"),
        ),
        CandidateItem(
            id="task-3",
            title="Organize desktop files",
            description="Clean up downloads folder and organize documents",
            estimated_duration=20,
            energy_required=Level.LOW,
            focus_required=Level.LOW,
            category="Admin",
            priority=Level.LOW,
            tags=("organization", "maintenance", "simple"),
        ),
        CandidateItem(
            id="task-4",
            title="Brainstorm marketing ideas",
            description="Generate creative concepts for the upcoming campaign",
            estimated_duration=30,
            energy_required=Level.HIGH,
            focus_required=Level.MEDIUM,
            category="Creative",
            priority=Level.MEDIUM,
            tags=("brainstorm", "creative", "marketing"),
        ),
        CandidateItem(
            id="task-5",
            title="Email responses",
            description="Reply to pending emails and clear inbox",
            estimated_duration=25,
            energy_required=Level.LOW,
            focus_required=Level.LOW,
            category="Communication",
            priority=Level.MEDIUM,
            tags=("email", "communication", "routine"),
        ),
        CandidateItem(
            id="task-6",
            title="Research competitive analysis",
            description="Deep dive into competitor features and strategies",
            estimated_duration=60,
            energy_required=Level.MEDIUM,
            focus_required=Level.HIGH,
            category="Research",
            priority=Level.HIGH,
            tags=("research", "analysis", "strategic"),
        ),
    ]
)
