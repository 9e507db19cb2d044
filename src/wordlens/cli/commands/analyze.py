"""Analyze command: categorize a text file and write word lists."""

import sys
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from wordlens import WordlensError
from wordlens.core.config import load_config
from wordlens.core.pipeline import AnalysisContext, Analyzer, ProgressEvent
from wordlens.core.tagger import OpenAITagger, StaticTagger

console = Console()


def add_subparser(subparsers):
    parser = subparsers.add_parser("analyze", help="Categorize the words of a text file")
    parser.add_argument("input", help="UTF-8 text file")
    parser.add_argument("-o", "--output", dest="output_root", help="Directory for the output folder (default: next to input)")
    parser.add_argument("-c", "--config", help="YAML config file")
    parser.add_argument("-w", "--workers", type=int, help="Parallel dictionary lookups")
    parser.add_argument("--tagger", choices=["openai", "static"], default="openai", help="POS tagger")
    parser.add_argument("--no-explanations", action="store_true", help="Only write word lists")
    parser.set_defaults(func=run_analyze)


def build_tagger(name: str):
    if name == "static":
        return StaticTagger()
    return OpenAITagger()


def run_analyze(args):
    config = load_config(args.config)
    if args.workers:
        config.workers = args.workers
    if args.no_explanations:
        config.generate_explanations = False
        config.generate_example_sentences = False
        config.write_unknown_words = False

    cancel = threading.Event()
    context = AnalysisContext.create(config)

    with Progress(
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[dim]{task.fields[item]}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("starting", total=None, item="")

        def on_progress(event: ProgressEvent):
            progress.update(
                task,
                description=event.stage,
                completed=event.current,
                total=event.total or None,
                item=event.item,
            )

        analyzer = Analyzer(context, build_tagger(args.tagger), on_progress=on_progress, cancel=cancel)

        # Run in a worker thread so Ctrl-C only stops new lookups
        with ThreadPoolExecutor(max_workers=1) as pool:
            future = pool.submit(analyzer.run, Path(args.input), args.output_root)
            while True:
                try:
                    summary = future.result(timeout=0.25)
                    break
                except TimeoutError:
                    continue
                except KeyboardInterrupt:
                    cancel.set()
                    console.print("[yellow]Interrupted, finishing in-flight lookups...[/yellow]")
                except WordlensError as e:
                    console.print(f"[red]✗ Error: {e}[/red]")
                    context.close()
                    sys.exit(1)

    context.close()

    icon = "[yellow]![/yellow]" if summary.cancelled else "[green]✓[/green]"
    console.print(f"{icon} {summary.total_words} unique words ({summary.known} known, {summary.unknown} unknown)")
    console.print(f"  output: {summary.output_dir}")
