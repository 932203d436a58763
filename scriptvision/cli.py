import asyncio
import json
from pathlib import Path
from typing import List, Optional

import aiofiles
import click
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from scriptvision.config import configure_logging
from scriptvision.errors import AIServiceError, ConfigurationError
from scriptvision.models import AspectRatio, ImageAnalysisInput, ImageResult
from scriptvision.service import AIService

console = Console()

ASPECT_RATIO_CHOICE = click.Choice([ratio.value for ratio in AspectRatio])


def _get_service(ctx: click.Context) -> AIService:
    """Return the service stored on the context, building it from the environment once."""
    obj = ctx.ensure_object(dict)
    if obj.get("service") is None:
        try:
            obj["service"] = AIService.from_env(obj.get("env_file"))
        except ConfigurationError as e:
            raise click.ClickException(str(e))
    return obj["service"]


def _load_reference(path: Path) -> ImageAnalysisInput:
    try:
        return ImageAnalysisInput.from_path(path)
    except ValueError as e:
        raise click.ClickException(f"{path}: {str(e)}")


def _print_prompts(prompts: List[str]) -> None:
    table = Table(title=f"{len(prompts)} image prompts")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Prompt")
    for index, prompt in enumerate(prompts, start=1):
        table.add_row(str(index), prompt)
    console.print(table)


async def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "wb") as f:
        await f.write(data)


async def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.option("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL or INFO).")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None,
              help="Load environment variables from this file.")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], env_file: Optional[str]):
    """Turn scripts into image prompts and images with Gemini."""
    configure_logging(log_level.upper() if log_level else None, console=console)
    obj = ctx.ensure_object(dict)
    obj.setdefault("env_file", env_file)


@cli.command()
@click.argument("script_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--style", required=True, help="Visual style for every prompt.")
@click.option("--niche", default="", help="Optional topic or niche.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write prompts and the request text to this JSON file.")
@click.pass_context
def prompts(ctx: click.Context, script_file: Path, style: str, niche: str, output: Optional[Path]):
    """Generate image prompts from a script file."""
    service = _get_service(ctx)
    script = script_file.read_text(encoding="utf-8")

    async def run():
        result = await service.generate_prompts(script, style, niche)
        _print_prompts(result.prompts)
        if output:
            await _write_json(output, {"prompts": result.prompts, "request_prompt": result.request_prompt})
            console.print(f"\nPrompts saved to: {output}")

    try:
        asyncio.run(run())
    except AIServiceError as e:
        raise click.ClickException(str(e))


@cli.command("analyze-style")
@click.argument("image_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def analyze_style(ctx: click.Context, image_file: Path):
    """Describe a reference image's style as prompt keywords."""
    service = _get_service(ctx)
    image = _load_reference(image_file)

    try:
        keywords = asyncio.run(service.analyze_image_style(image))
    except AIServiceError as e:
        raise click.ClickException(str(e))

    console.print(keywords)


@cli.command()
@click.argument("prompt")
@click.option("--aspect-ratio", type=ASPECT_RATIO_CHOICE, default=AspectRatio.SQUARE.value, show_default=True)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), required=True,
              help="Where to write the JPEG image.")
@click.pass_context
def generate(ctx: click.Context, prompt: str, aspect_ratio: str, output: Path):
    """Generate a single image from a prompt."""
    service = _get_service(ctx)

    async def run() -> ImageResult:
        result = await service.generate_image(prompt, aspect_ratio)
        if result.ok:
            await _write_bytes(output, result.to_bytes())
        return result

    result = asyncio.run(run())
    if not result.ok:
        raise click.ClickException(result.error)
    console.print(f"Image saved to: {output}")


@cli.command()
@click.argument("script_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--style", default="", help="Visual style for every prompt.")
@click.option("--niche", default="", help="Optional topic or niche.")
@click.option("--reference-image", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None,
              help="Image whose style is analyzed and added to --style.")
@click.option("--aspect-ratio", type=ASPECT_RATIO_CHOICE, default=AspectRatio.WIDESCREEN.value, show_default=True)
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), required=True)
@click.pass_context
def storyboard(ctx: click.Context, script_file: Path, style: str, niche: str,
               reference_image: Optional[Path], aspect_ratio: str, output_dir: Path):
    """Generate prompts from a script, then one image per prompt."""
    if not style and reference_image is None:
        raise click.UsageError("Provide --style, --reference-image, or both.")

    service = _get_service(ctx)
    script = script_file.read_text(encoding="utf-8")
    reference = _load_reference(reference_image) if reference_image else None

    async def run() -> List[ImageResult]:
        full_style = style
        if reference is not None:
            keywords = await service.analyze_image_style(reference)
            console.print(f"[bold]Reference style:[/bold] {keywords}")
            full_style = f"{style}, {keywords}" if style else keywords

        generated = await service.generate_prompts(script, full_style, niche)
        _print_prompts(generated.prompts)
        await _write_json(output_dir / "prompts.json", {
            "prompts": generated.prompts,
            "request_prompt": generated.request_prompt,
        })

        results = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            console=console
        ) as progress:
            task = progress.add_task("Generating images", total=len(generated.prompts))
            for index, prompt in enumerate(generated.prompts, start=1):
                progress.update(task, description=f"Scene {index}/{len(generated.prompts)}")
                result = await service.generate_image(prompt, aspect_ratio)
                if result.ok:
                    await _write_bytes(output_dir / f"scene_{index:02d}.jpg", result.to_bytes())
                else:
                    progress.console.print(f"[red]Scene {index} failed:[/red] {result.error}")
                results.append(result)
                progress.update(task, advance=1)
        return results

    try:
        results = asyncio.run(run())
    except AIServiceError as e:
        raise click.ClickException(str(e))

    succeeded = sum(1 for result in results if result.ok)
    console.print(f"\n[green]{succeeded}[/green] of {len(results)} images saved to {output_dir}")
    if results and not succeeded:
        raise click.ClickException("No images were generated.")


def main():
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
