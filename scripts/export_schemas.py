"""Export JSON schemas for the persisted state and map draft models."""

import json
from pathlib import Path

from tripbook.app.models import DraftActivity, TripState


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Persisted record uses camelCase aliases
    state_schema = TripState.model_json_schema(by_alias=True)
    state_path = schemas_dir / "TripState.schema.json"
    with open(state_path, "w") as f:
        json.dump(state_schema, f, indent=2)
    print(f"Exported TripState schema to {state_path}")

    draft_schema = DraftActivity.model_json_schema(by_alias=True)
    draft_path = schemas_dir / "DraftActivity.schema.json"
    with open(draft_path, "w") as f:
        json.dump(draft_schema, f, indent=2)
    print(f"Exported DraftActivity schema to {draft_path}")


if __name__ == "__main__":
    main()
