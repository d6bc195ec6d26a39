import pytest
from pathlib import Path
from ezpp import Beatmap, GameMode

data_dir = Path(__file__).resolve().parent.parent / "example_data" / "beatmaps"


@pytest.mark.parametrize("beatmap_path", sorted(data_dir.glob("*.osu")))
def test_load_example_beatmap(beatmap_path: Path) -> None:
    beatmap = Beatmap.parse(beatmap_path.read_text(encoding="utf-8-sig"))

    assert beatmap.mode is GameMode.standard
    assert None not in beatmap.stats
    assert beatmap.stats.ar >= 0
    assert beatmap.object_counts.total == len(beatmap.hit_objects)
