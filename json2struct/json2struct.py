import json
import logging
from dataclasses import replace
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line, set_up_logging
from .errors import Json2StructError
from .pipeline import AtomicWriter, CodeGeneratorConfig, OutputMode, PipelineGenerator, parse_flag_string
from .pipeline.value_tree import object_pairs_hook, parse_invocation
from .utils import to_pascal_case

logger = logging.getLogger(__name__)


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Root struct name (defaults to the JSON file name)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--flag",
    "-f",
    "flags",
    multiple=True,
    help="Directive flag, e.g. camel, debug, store_json or 'derive(PartialEq)'",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log each pipeline phase")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(dir_okay=False, allow_dash=True))
def json2struct(name, config, flags, force, verbose, path, output):
    """Generate Rust structs from PATH and write them to OUTPUT ("-" for stdout).

    PATH is either a .json file or an invocation file such as

        Company @camel @store_json {"company_name" => "Acme"}
    """
    set_up_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # Apply CLI flag for overwriting (overrides config file if set)
    if force:
        config.output.mode = OutputMode.FORCE

    command_line = reconstruct_command_line(json2struct)

    try:
        if Path(path).suffix.lower() == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f, object_pairs_hook=object_pairs_hook)
            if name is None:
                name = to_pascal_case(Path(path).stem)
            codegen = PipelineGenerator.from_json(name, data, flags, config, command_line)
        else:
            with open(path, encoding="utf-8") as f:
                invocation = parse_invocation(f.read())
            extra_flags = tuple(parse_flag_string(flag) for flag in flags)
            invocation = replace(invocation, name=name or invocation.name, flags=invocation.flags + extra_flags)
            codegen = PipelineGenerator(invocation, config, command_line)

        out = codegen.generate()

        if output == "-":
            click.echo(out, nl=False)
        else:
            AtomicWriter(config.output).write(Path(output), out)
            logger.info("Wrote %s", output)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}") from e
    except Json2StructError as e:
        raise click.ClickException(str(e)) from e
