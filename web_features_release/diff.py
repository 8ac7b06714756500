"""Diff the published data file against a fresh build.

The published package is installed into a throwaway directory so its
generated JSON can be compared with what ``npm run build`` produces from the
working tree. Both files are pretty-printed with jq first so the unified
diff is line-oriented and readable in a pull request.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from .log import logger
from .models import ReleaseContext
from .shell import step

# diff(1) exits 1 when the inputs differ; anything above that is trouble.
DIFF_FOUND = 1


def pretty_json(ctx: ReleaseContext, source: Path, dest: Path) -> Path:
    """Write jq's pretty-printed rendering of source to dest."""
    result = ctx.shell.run("jq", ".", str(source)).check()
    dest.write_text(result.stdout, encoding="utf-8")
    return dest


def unified_diff(ctx: ReleaseContext, old: Path, new: Path) -> str:
    """Run ``diff --unified`` and return its output.

    Returns "" for identical files.

    Raises:
        CommandError: If diff exits with a status other than 0 or 1.
    """
    result = ctx.shell.run("diff", "--unified", str(old), str(new))
    if result.returncode == DIFF_FOUND:
        return result.stdout
    return result.check().stdout


def diff_json(ctx: ReleaseContext) -> str:
    """Compare the published data file with one built from the working tree.

    Steps:
    1. Install the latest published package into a fresh temp directory
    2. Pretty-print its data file
    3. Build the working tree
    4. Pretty-print the freshly built data file
    5. Diff the two

    The temp directory is left in place so the inputs can be inspected.

    Raises:
        CommandError: If install, build, jq or diff fail.
    """
    cfg = ctx.config
    step(f"Diffing published {cfg.package} against working tree")

    tmp_dir = Path(tempfile.mkdtemp(prefix=f"{cfg.package}-"))
    logger.debug(f"Using temporary directory {tmp_dir}")

    logger.info(f"Installing published {cfg.package}")
    ctx.shell.run("npm", "install", cfg.package, cwd=tmp_dir).check()
    released = tmp_dir / "node_modules" / cfg.package / cfg.data_file
    released_pretty = pretty_json(ctx, released, tmp_dir / "index.released.pretty.json")

    logger.info("Building working tree")
    ctx.shell.run("npm", "run", "build", capture=False).check()
    prepared = cfg.package_dir / cfg.data_file
    prepared_pretty = pretty_json(ctx, prepared, tmp_dir / "index.prepared.pretty.json")

    diff = unified_diff(ctx, released_pretty, prepared_pretty)
    if diff:
        logger.info(f"{cfg.data_file} changed since the published release")
    else:
        logger.info(f"{cfg.data_file} is unchanged since the published release")
    return diff
