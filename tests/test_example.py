# a release build expressed as a steps graph: the release directory is emptied once,
# then a copy of the sources and a bundle are produced from it concurrently

import anyio
import pytest

from stepgraph import execute, step, topology


def build_steps(root: anyio.Path, calls: list[str]):
    release = root / "release"

    @step()
    async def ensure_release():
        calls.append("ensure_release")
        await release.mkdir(parents=True, exist_ok=True)
        return release

    @step("ensure_release")
    async def clean(release_dir):
        calls.append("clean")
        for child in [child async for child in release_dir.iterdir()]:
            await child.unlink()
        return release_dir

    @step("clean")
    async def copied(release_dir):
        calls.append("copied")
        target = release_dir / "index.py"
        await target.write_text(await (root / "index.py").read_text())
        return target

    @step("clean")
    async def bundled(release_dir):
        calls.append("bundled")
        source = await (root / "index.py").read_text()
        target = release_dir / "bundle.min.py"
        await target.write_text(" ".join(source.split()))
        return target

    @step("copied", "bundled")
    def done(copied_file, bundle_file):
        calls.append("done")
        return sorted(path.name for path in (copied_file, bundle_file))

    return {
        "ensure_release": ensure_release,
        "clean": clean,
        "copied": copied,
        "bundled": bundled,
        "done": done,
    }


@pytest.mark.anyio
async def test_release_build(tmp_path):
    root = anyio.Path(tmp_path)
    await (root / "index.py").write_text("def  run():\n    return   1\n")
    await (root / "release").mkdir()
    await (root / "release" / "stale.txt").write_text("stale")

    calls: list[str] = []
    steps = build_steps(root, calls)

    results = await execute(steps, ["done"])

    assert results == {"done": ["bundle.min.py", "index.py"]}
    assert sorted([p.name async for p in (root / "release").iterdir()]) == [
        "bundle.min.py",
        "index.py",
    ]
    assert await (root / "release" / "bundle.min.py").read_text() == (
        "def run(): return 1"
    )

    # every step ran exactly once, after its dependencies
    assert sorted(calls) == sorted(steps)
    assert calls.index("clean") < min(calls.index("copied"), calls.index("bundled"))
    assert calls[-1] == "done"


@pytest.mark.anyio
async def test_release_build_plan(tmp_path):
    topo = topology(build_steps(anyio.Path(tmp_path), []), ["copied"])

    assert topo.order == ["ensure_release", "clean", "copied"]
