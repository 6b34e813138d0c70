"""
Command-line interface for do-cli
"""
import logging
from typing import List, Optional

import typer
from dotenv import load_dotenv

from .lib.config import DEFAULT_BASE_URL
from .lib.cmd import (
    # Command implementations
    account_info_command,
    list_command,
    get_command,
    create_command,
    delete_command,
    config_set_command,
    config_get_command
)
from .lib.utils import OutputFormat, parse_droplet_id

app = typer.Typer(help=f"DigitalOcean CLI - manage your account and droplets ({DEFAULT_BASE_URL})")
account_app = typer.Typer(help="Account information")
droplets_app = typer.Typer(help="Droplet management commands")
config_app = typer.Typer(help="Read and write the do-cli configuration")
app.add_typer(account_app, name="account")
app.add_typer(droplets_app, name="droplets")
app.add_typer(config_app, name="config")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

OUTPUT_OPTION = typer.Option(OutputFormat.table, '--output', '-o', help='Output format')


def _droplet_id(value: str) -> int:
    try:
        return parse_droplet_id(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.callback()
def main_callback(
    debug: bool = typer.Option(False, '--debug', '-d', help='Enable debug logging')
):
    """
    DigitalOcean CLI

    Credentials come from DIGITALOCEAN_TOKEN / DIGITALOCEAN_BASE_URL or the
    config file written by 'do-cli config set'.
    """
    if debug:
        logging.getLogger("do_cli").setLevel(logging.DEBUG)
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, force=True)


@account_app.command("info")
def account_info(output: OutputFormat = OUTPUT_OPTION):
    """Show account information"""
    return account_info_command(output=output)


@droplets_app.command("list")
def droplets_list(output: OutputFormat = OUTPUT_OPTION):
    """List all droplets"""
    return list_command(output=output)


@droplets_app.command("get")
def droplets_get(
    droplet_id: str = typer.Argument(..., help='Droplet ID'),
    output: OutputFormat = OUTPUT_OPTION
):
    """Get droplet details"""
    return get_command(droplet_id=_droplet_id(droplet_id), output=output)


@droplets_app.command("create")
def droplets_create(
    name: str = typer.Option(..., '--name', '-n', help='Droplet name'),
    region: str = typer.Option(..., '--region', '-r', help='Region slug (e.g. nyc3)'),
    size: str = typer.Option(..., '--size', '-s', help='Size slug (e.g. s-1vcpu-1gb)'),
    image: str = typer.Option(..., '--image', '-i', help='Image slug or ID'),
    tags: Optional[List[str]] = typer.Option(None, '--tag', '-t', help='Tag to apply (repeatable)'),
    ssh_keys: Optional[List[str]] = typer.Option(None, '--ssh-key', help='SSH key ID or fingerprint (repeatable)'),
    volumes: Optional[List[str]] = typer.Option(None, '--volume', help='Volume ID to attach (repeatable)'),
    user_data: Optional[str] = typer.Option(None, '--user-data', help='Cloud-init user data'),
    vpc_uuid: Optional[str] = typer.Option(None, '--vpc-uuid', help='VPC to place the droplet in'),
    backups: bool = typer.Option(False, '--backups', help='Enable backups'),
    ipv6: bool = typer.Option(False, '--ipv6', help='Enable IPv6'),
    monitoring: bool = typer.Option(False, '--monitoring', help='Install the monitoring agent'),
    private_networking: bool = typer.Option(False, '--private-networking', help='Enable private networking')
):
    """Create a new droplet"""
    return create_command(
        name=name,
        region=region,
        size=size,
        image=image,
        tags=tags,
        ssh_keys=ssh_keys,
        volumes=volumes,
        user_data=user_data,
        vpc_uuid=vpc_uuid,
        backups=backups,
        ipv6=ipv6,
        monitoring=monitoring,
        private_networking=private_networking
    )


@droplets_app.command("delete")
def droplets_delete(
    droplet_id: str = typer.Argument(..., help='Droplet ID'),
    force: bool = typer.Option(False, '--force', '-f', help='Delete without confirmation')
):
    """Delete a droplet"""
    return delete_command(droplet_id=_droplet_id(droplet_id), force=force)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help='Config key: token, base-url or timeout'),
    value: str = typer.Argument(..., help='Value to store')
):
    """Set a configuration value"""
    return config_set_command(key=key, value=value)


@config_app.command("get")
def config_get(
    key: Optional[str] = typer.Argument(None, help='Config key: token, base-url or timeout')
):
    """Show configuration (token masked)"""
    return config_get_command(key=key)


def main():
    """Main entry point"""
    # Load environment variables from .env file
    load_dotenv()

    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)

    # Run the app
    app()


if __name__ == "__main__":
    main()
