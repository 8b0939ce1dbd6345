#!/usr/bin/env python3
import logging, sys
import click
from config.logging_config import configure
from config.app_config import settings
from appliance_logger.core.exceptions import NotLoggedInError
from appliance_logger.orchestration import DataLoggingOrchestrator, OrchestratorConfig
from appliance_logger.services import CredentialStore, InfluxService

log = logging.getLogger("main")


def load_client(state):
    # wideq is only imported once a command actually talks to the cloud
    from appliance_logger.protocols.wideq_client import WideqDeviceClient
    try:
        return WideqDeviceClient.load(state)
    except (KeyError, TypeError) as e:
        log.warning(f"Ignoring malformed credential state: {e!r}")
        return WideqDeviceClient.load({})


def make_sink():
    return InfluxService(
        host=settings.INFLUX_HOST,
        port=settings.INFLUX_PORT,
        database=settings.INFLUX_DATABASE,
        user=settings.INFLUX_USER,
        pwd=settings.INFLUX_PWD,
    )


def build_orchestrator(dry_run: bool = False) -> DataLoggingOrchestrator:
    return DataLoggingOrchestrator(
        CredentialStore(settings.CREDENTIALS_PATH),
        client_loader=load_client,
        sink_factory=make_sink,
        config=OrchestratorConfig(
            dry_run=dry_run,
            max_retries=settings.MAX_RETRIES,
            poll_interval=settings.POLL_INTERVAL,
            max_polls=settings.MAX_POLLS,
        ),
    )


@click.group()
@click.option("--log/--no-log", default=True, help=f"log output to {settings.LOG_FILE}")
@click.option("-v", "--verbose", is_flag=True, help="increase verbosity")
def cli(log, verbose):
    """Record LG appliance status to InfluxDB."""
    configure(verbose=verbose, log_file=settings.LOG_FILE if log else None)


@cli.command()
def authorize():
    """[re]authorize the application"""
    client = load_client({})
    click.echo("Log in here:")
    click.echo(client.oauth_url())
    callback_url = click.prompt("Then paste the URL where the browser is redirected")
    client.authorize_from_url(callback_url.strip())
    CredentialStore(settings.CREDENTIALS_PATH).save(client.dump_state())
    click.echo(f"Saved credentials to {settings.CREDENTIALS_PATH}")


@cli.command()
def ls():
    """list the account's devices"""
    orchestrator = build_orchestrator()
    try:
        orchestrator.connect()
    except NotLoggedInError as e:
        log.error(e)
        sys.exit(1)
    for device in orchestrator.discover():
        click.echo(f'{device.device_id}: "{device.name}" '
                   f'(type {device.type_name or device.type.name}, id {device.model_id})')


@cli.command("record-status")
@click.option("-n", "--dry-run", is_flag=True, help="don't log to database")
def record_status(dry_run):
    """record the current usage data to database"""
    try:
        build_orchestrator(dry_run=dry_run).run()
    except NotLoggedInError as e:
        log.error(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
