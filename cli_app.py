#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
SearchRanker - CLI Interface
Command-line interface for ranking a crawled corpus with PageRank and TF-IDF
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from SearchRanker.config import load_config
from SearchRanker.errors import SearchRankerError
from SearchRanker.main import SORT_KEYS, SearchRanker, SearchResult

# Initialize rich console
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


class SearchRankerCLI:
    def __init__(self, config=None):
        """Initialize the CLI interface"""
        self.ranker = SearchRanker(config=config)

    def print_header(self):
        """Display the application header"""
        console.print(Panel(
            "[bold blue]SearchRanker[/bold blue] [yellow]PageRank + TF-IDF[/yellow]",
            border_style="blue",
            subtitle="Relevance ranking for crawled documents",
            width=80
        ))

    def _progress(self) -> Progress:
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True
        )

    def load_documents(self, documents_path: str) -> bool:
        """Load documents from a JSON file"""
        console.print(f"Loading documents from: [cyan]{documents_path}[/cyan]")
        try:
            with self._progress() as progress:
                progress.add_task("Loading documents...", total=None)
                documents = self.ranker.load_documents(documents_path)
        except (OSError, ValueError) as e:
            console.print(f"[bold red]Error loading documents:[/bold red] {e}")
            return False

        if not documents:
            console.print("[bold red]The corpus contains no documents.[/bold red]")
            return False

        console.print(f"[green]Successfully loaded [bold]{len(documents)}[/bold] documents[/green]")
        return True

    def init_engines(self, decay: Optional[float] = None, epsilon: Optional[float] = None,
                     max_iterations: Optional[int] = None) -> bool:
        """Build the PageRank and TF-IDF engines for the loaded corpus"""
        try:
            with self._progress() as progress:
                progress.add_task("Computing PageRank...", total=None)
                engine = self.ranker.init_pagerank_engine(
                    decay=decay, epsilon=epsilon, max_iterations=max_iterations
                )

            status = "converged" if engine.converged else "[yellow]did not converge[/yellow]"
            console.print(f"[green]PageRank {status} after {engine.iterations} iterations[/green]")

            with self._progress() as progress:
                progress.add_task("Building TF-IDF model...", total=None)
                self.ranker.init_tfidf_engine()

            console.print("[green]TF-IDF relevance engine initialized successfully[/green]")
            return True
        except (SearchRankerError, ValueError) as e:
            console.print(f"[bold red]Error initializing engines:[/bold red] {e}")
            return False

    def search(self, query: str, top_k: Optional[int] = None,
               sort_by: Optional[str] = None) -> List[SearchResult]:
        """Score the corpus against a whitespace-separated query"""
        tokens = query.split()
        console.print(f"Executing search: '[cyan]{query}[/cyan]'")

        start_time = time.time()
        results = self.ranker.search(tokens, top_k=top_k, sort_by=sort_by)
        execution_time = time.time() - start_time

        console.print(f"[green]Scored {len(self.ranker.documents)} documents "
                      f"in {execution_time:.6f} seconds[/green]")
        return results

    def top_by_pagerank(self, top_k: Optional[int] = None) -> List[SearchResult]:
        """List documents by PageRank alone"""
        return self.ranker.search([], top_k=top_k, sort_by="pagerank")

    @staticmethod
    def _format_score(score: float) -> str:
        score_str = f"{score:.4f}"
        if score > 0.7:
            return f"[bold green]{score_str}[/bold green]"
        if score > 0.4:
            return f"[yellow]{score_str}[/yellow]"
        return f"[dim]{score_str}[/dim]"

    def display_results(self, results: List[SearchResult], title: str):
        """Display search results in a formatted way"""
        if not results:
            console.print("[yellow]No matching documents found.[/yellow]")
            return

        table = Table(
            box=box.HEAVY_EDGE,
            show_header=True,
            header_style="bold magenta",
            title=f"[bold]{title}[/bold]",
            title_style="yellow"
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Document", style="cyan bold")
        table.add_column("Title", style="green")
        table.add_column("Relevance", width=10)
        table.add_column("PageRank", style="yellow", width=10)

        for i, result in enumerate(results):
            # Highlight the row for the top result
            row_style = "on blue" if i == 0 else ""
            table.add_row(
                str(i + 1),
                result.document.uri,
                result.document.title or "[dim]<No title>[/dim]",
                self._format_score(result.relevance),
                f"{result.pagerank:.6f}",
                style=row_style
            )

        console.print(table)

    def interactive_mode(self, top_k: Optional[int] = None, sort_by: Optional[str] = None):
        """Run queries until the user quits"""
        console.print("[dim]Type 'quit' to exit[/dim]")
        while True:
            console.rule("[bold blue]SearchRanker[/bold blue]")
            query = console.input("[bold cyan]Enter search query: [/bold cyan]").strip()

            if query.lower() in ("quit", "exit"):
                break
            if not query:
                console.print("[bold red]Empty query. Please try again.[/bold red]")
                continue

            results = self.search(query, top_k=top_k, sort_by=sort_by)
            self.display_results(results, f"Results for '{query}'")


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SearchRanker - PageRank and TF-IDF ranking of a crawled corpus'
    )
    parser.add_argument('--documents', required=True, help='Path to documents JSON file')
    parser.add_argument('--query', help='Whitespace-separated query to score documents against')
    parser.add_argument('--top', type=non_negative_int, help='Number of top results to display')
    parser.add_argument('--sort-by', choices=SORT_KEYS, help='Signal used to order results')
    parser.add_argument('--config', help='Path to a config JSON file')
    parser.add_argument('--decay', type=float, help='PageRank damping factor')
    parser.add_argument('--epsilon', type=float, help='PageRank convergence threshold')
    parser.add_argument('--max-iterations', type=int, help='PageRank iteration limit')
    parser.add_argument('--interactive', action='store_true', help='Run in interactive mode')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')
    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI application"""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
    except OSError as e:
        console.print(f"[bold red]Error loading config:[/bold red] {e}")
        return 1

    cli = SearchRankerCLI(config=config)
    cli.print_header()

    if not cli.load_documents(args.documents):
        return 1

    if not cli.init_engines(args.decay, args.epsilon, args.max_iterations):
        return 1

    try:
        if args.interactive:
            cli.interactive_mode(top_k=args.top, sort_by=args.sort_by)
        elif args.query:
            results = cli.search(args.query, top_k=args.top, sort_by=args.sort_by)
            cli.display_results(results, f"Results for '{args.query}'")
        else:
            cli.display_results(cli.top_by_pagerank(top_k=args.top), "Top documents by PageRank")
    except (SearchRankerError, ValueError) as e:
        console.print(f"[bold red]Error during search:[/bold red] {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
