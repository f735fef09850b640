"""CLI entry point for swagger-scaffold."""

from pathlib import Path

import click

from swagger_scaffold.config import DEFAULT_FRAMEWORK, FRAMEWORKS, GenerationConfig
from swagger_scaffold.errors import ScaffoldError
from swagger_scaffold.generator.code import CodeGenerator
from swagger_scaffold.generator.models import load_definitions, synthesize_all
from swagger_scaffold.generator.naming import handler_modules
from swagger_scaffold.generator.routes import aggregate
from swagger_scaffold.generator.testcase import assemble
from swagger_scaffold.generator.validator import validate_files
from swagger_scaffold.parser.swagger import load_document


def _write_files(root: Path, files: dict[str, str], skip_existing: bool) -> int:
    """Write rendered files under root. Returns the number written."""
    written = 0
    for filename, content in files.items():
        file_path = root / filename
        if skip_existing and file_path.exists():
            click.echo(f"  Skipped {file_path} (exists)")
            continue
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}")
        written += 1
    return written


@click.group()
def main():
    """Swagger Scaffold: generate a web-service project from a Swagger 2.0 document."""
    pass


@main.command()
@click.argument("doc_path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=".", show_default=True, type=click.Path(file_okay=False, path_type=Path), help="Directory the project folder is created in.")
@click.option("--name", "appname", prompt="What would you like to call this project", help="Project name.")
@click.option("--author", "creator_name", prompt="Your name", default="", help="Author name.")
@click.option("--github-user", prompt="Your github user name", default="", help="GitHub user name.")
@click.option("--email", prompt="Your email", default="", help="Author email.")
@click.option("--framework", prompt=f"Framework ({' or '.join(FRAMEWORKS)})", default=DEFAULT_FRAMEWORK, help="Target web framework.")
@click.option("--skip-existing", is_flag=True, default=False, help="Keep files that already exist instead of overwriting them.")
def generate(doc_path: Path | None, output: Path, appname: str, creator_name: str, github_user: str, email: str, framework: str, skip_existing: bool):
    """Scaffold handlers, models and tests from a Swagger document."""
    if doc_path is None:
        doc_path = click.prompt(
            "Path to swagger document",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
        )

    try:
        config = GenerationConfig.create(
            appname=appname,
            api_path=doc_path.resolve(),
            framework=framework,
            creator_name=creator_name,
            github_user=github_user,
            email=email,
        )
        click.echo(f"Parsing {doc_path}...")
        document = load_document(doc_path)
    except ScaffoldError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Found {len(document['paths'])} paths.")

    click.echo(f"Generating {config.framework} project '{config.appname}'...")
    files = CodeGenerator(config.framework).generate(
        document, config, doc_path.read_text(encoding="utf-8")
    )

    errors = validate_files(files)
    if errors:
        for fname, err in errors.items():
            click.echo(f"    {fname}: {err}", err=True)
        raise click.ClickException(f"{len(errors)} generated files failed validation")

    root = output / config.appname
    written = _write_files(root, files, skip_existing)
    click.echo(f"Done! Generated {written} files in {root}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(doc_path: Path):
    """Show the routes, model instances and test files a document produces."""
    try:
        document = load_document(doc_path)
    except ScaffoldError as e:
        raise click.ClickException(str(e)) from e

    routes = aggregate(document["paths"])
    models = synthesize_all(load_definitions(document))
    modules = handler_modules(routes)
    descriptors = assemble(document, routes, models, "handlers", f"config/{doc_path.name}", modules)

    click.echo("Routes:")
    for pathname, route in routes.items():
        methods = ", ".join(op.method.upper() for op in route.methods)
        click.echo(f"  /{pathname} [{methods}] -> handlers/{modules[pathname]}.py")

    click.echo("Models:")
    for name, instance in models.items():
        click.echo(f"  {name}: {instance}")

    click.echo("Tests:")
    for descriptor in descriptors:
        click.echo(f"  {descriptor.path} -> tests/{descriptor.file_name} ({len(descriptor.operations)} operations)")
