"""
Command-line interface for deploying pipeline definitions to AWS Data Pipeline.

This module wires configuration, the boto3 gateway, the definition loader and
the deploy orchestrator together, and maps failures to exit codes.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from datapipeline_deploy.core.config import DEFAULT_REGION, DeployConfig
from datapipeline_deploy.core.deploy_orchestrator import DeployOrchestrator
from datapipeline_deploy.core.exceptions import (
    AmbiguousNameError,
    ConfigurationError,
    DeployError,
    MalformedDefinitionError,
    RemoteOperationError,
    ValidationFailure,
)
from datapipeline_deploy.gateway.datapipeline_gateway import DataPipelineGateway
from datapipeline_deploy.io.definition_loader import load_definition
from datapipeline_deploy.translation.translator import DefinitionTranslator

EXIT_OK = 0
EXIT_CONFIGURATION = 1
EXIT_MALFORMED_DEFINITION = 2
EXIT_AMBIGUOUS_NAME = 3
EXIT_REMOTE_OPERATION = 4
EXIT_VALIDATION_FAILURE = 5
EXIT_FILESYSTEM = 8
EXIT_UNEXPECTED = 9


def configure_logging(debug: bool = False, verbose: bool = False) -> None:
    """Configure application logging.

    Args:
        debug: Enable debug-level logging if True.
        verbose: Include timestamps and logger names if True.
    """
    if debug:
        level = logging.DEBUG
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif verbose:
        level = logging.INFO
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    else:
        level = logging.INFO
        format_str = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        stream=sys.stdout,
        force=True,  # Override existing configuration
    )

    if not debug:
        # botocore is chatty at INFO (credential discovery, endpoints)
        logging.getLogger("botocore").setLevel(logging.WARNING)
        logging.getLogger("boto3").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with `deploy` and `translate` commands."""
    parser = argparse.ArgumentParser(
        prog="datapipeline-deploy",
        description=(
            "Deploy a pipeline definition to AWS Data Pipeline, "
            "replacing any existing pipeline of the same name"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Deploy (credentials from AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY)
  datapipeline-deploy deploy --pipeline-name nightly-etl \\
    --definition-file pipeline.json --tags "env=prod,team=infra"

  # Show the translated definition without contacting AWS
  datapipeline-deploy translate --definition-file pipeline.json -o out.json
""",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--definition-file",
        dest="pipeline_definition_file",
        type=Path,
        required=True,
        help="Path to the JSON/YAML pipeline definition",
    )
    common.add_argument(
        "--debug", action="store_true", help="Enable debug logging for detailed output"
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Include timestamps and logger names in log output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    deploy = commands.add_parser(
        "deploy", parents=[common], help="Replace the named pipeline"
    )
    deploy.add_argument(
        "--pipeline-name", dest="pipeline_name", help="Name of the pipeline"
    )
    deploy.add_argument(
        "--tags",
        dest="pipeline_tags",
        metavar="KEY=VALUE[,KEY=VALUE...]",
        help="Tags attached to the created pipeline",
    )
    deploy.add_argument(
        "--description",
        dest="pipeline_description",
        help="Description of the created pipeline",
    )
    deploy.add_argument(
        "--region", help=f"AWS region (default: {DEFAULT_REGION})"
    )
    deploy.add_argument(
        "--access-key-id",
        dest="access_key_id",
        help="AWS access key id (default: $AWS_ACCESS_KEY_ID)",
    )
    deploy.add_argument(
        "--secret-access-key",
        dest="secret_access_key",
        help="AWS secret access key (default: $AWS_SECRET_ACCESS_KEY)",
    )

    translate = commands.add_parser(
        "translate",
        parents=[common],
        help="Print the translated definition as service JSON",
    )
    translate.add_argument(
        "-o",
        "--output",
        dest="output_file",
        type=Path,
        help="Write the translated definition here instead of stdout",
    )

    return parser


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def run_deploy(args: argparse.Namespace) -> int:
    """Execute the deploy protocol.

    Returns:
        The process exit code.
    """
    logger = logging.getLogger(__name__)

    config = DeployConfig.from_options(vars(args))
    logger.info(
        f"Deploying pipeline {config.pipeline_name} with pipeline definition "
        f"@ {config.pipeline_definition_file}"
    )

    definition = load_definition(config.pipeline_definition_file)
    gateway = DataPipelineGateway.from_config(config)
    orchestrator = DeployOrchestrator(gateway)

    result = orchestrator.deploy(
        config.pipeline_name,
        definition,
        description=config.pipeline_description,
        tags=config.pipeline_tags,
    )

    if result.replaced_pipeline_id:
        logger.info(
            f"Replaced pipeline {result.replaced_pipeline_id} "
            f"with {result.pipeline_id}"
        )
    return EXIT_OK


def run_translate(args: argparse.Namespace) -> int:
    """Translate a definition file and emit the service-shaped JSON.

    Returns:
        The process exit code.
    """
    logger = logging.getLogger(__name__)

    definition = load_definition(args.pipeline_definition_file)
    translated = DefinitionTranslator().translate(definition)
    payload = json.dumps(translated.to_api(), indent=2)

    if args.output_file:
        args.output_file.parent.mkdir(parents=True, exist_ok=True)
        args.output_file.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Translated definition saved to: {args.output_file}")
    else:
        print(payload)
    return EXIT_OK


def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command and translate failures to exit codes."""
    configure_logging(args.debug, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        if args.command == "translate":
            return run_translate(args)
        return run_deploy(args)

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        logger.info(f"Suggestion: {e.get_recovery_hint()}")
        return EXIT_CONFIGURATION
    except MalformedDefinitionError as e:
        logger.error(f"Malformed pipeline definition: {e}")
        logger.info(f"Suggestion: {e.get_recovery_hint()}")
        return EXIT_MALFORMED_DEFINITION
    except AmbiguousNameError as e:
        logger.error(f"Ambiguous pipeline name: {e}")
        logger.info(f"Suggestion: {e.get_recovery_hint()}")
        return EXIT_AMBIGUOUS_NAME
    except RemoteOperationError as e:
        logger.error(f"Remote operation failed: {e}")
        return EXIT_REMOTE_OPERATION
    except ValidationFailure as e:
        logger.error(f"Deployment failed: {e}")
        for error in e.validation_errors:
            logger.error(f"  {error}")
        return EXIT_VALIDATION_FAILURE
    except DeployError as e:
        logger.error(f"Deploy error: {e}")
        return EXIT_UNEXPECTED
    except (PermissionError, FileNotFoundError, OSError) as e:
        logger.error(f"File system error: {e}")
        return EXIT_FILESYSTEM
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.debug:
            logger.exception("Full traceback:")
        return EXIT_UNEXPECTED


def main(argv: list[str] | None = None) -> NoReturn:
    """Console entry point."""
    sys.exit(run(parse_arguments(argv)))


if __name__ == "__main__":
    main()
