"""
Droplet commands implementation for do-cli (list, get, create, delete)
"""
import logging
from typing import List, Optional

import typer
from rich.prompt import Confirm
from rich.table import Table

from ..api.client import DigitalOceanClient
from ..api.types import CreateDropletRequest, Droplet
from ..utils import OutputFormat, format_date, format_datetime, or_na, render_document
from .base import api_errors, console

logger = logging.getLogger("do_cli.lib.cmd.droplets")


def list_command(output: OutputFormat = OutputFormat.table) -> None:
    """List all droplets"""
    with api_errors("list droplets"):
        with DigitalOceanClient.from_config() as client:
            droplets = client.list_droplets()

    if output != OutputFormat.table:
        typer.echo(render_document(droplets, output))
        return

    if not droplets:
        console.print("[yellow]No droplets found")
        return

    table = Table(title="Droplets")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Size", style="yellow")
    table.add_column("Region", style="blue")
    table.add_column("IP", style="green")
    table.add_column("Created")

    for droplet in droplets:
        table.add_row(
            str(droplet.id),
            or_na(droplet.name),
            or_na(droplet.status),
            or_na(droplet.size_slug),
            or_na(droplet.region.slug if droplet.region else None),
            or_na(droplet.public_ipv4),
            format_date(droplet.created_at),
        )

    console.print(table)


def print_droplet(droplet: Droplet) -> None:
    """Print the detail view of a droplet"""
    console.print("[bold]Droplet Details:")
    console.print(f"  ID: {droplet.id}")
    console.print(f"  Name: {or_na(droplet.name)}")
    console.print(f"  Status: {or_na(droplet.status)}")
    console.print(f"  Memory: {droplet.memory} MB")
    console.print(f"  VCPUs: {droplet.vcpus}")
    console.print(f"  Disk: {droplet.disk} GB")
    console.print(f"  Locked: {'true' if droplet.locked else 'false'}")
    console.print(f"  Created: {format_datetime(droplet.created_at)}")

    if droplet.image:
        console.print(f"  Image: {or_na(droplet.image.name)} ({or_na(droplet.image.distribution)})")
    if droplet.size:
        console.print(f"  Size: {or_na(droplet.size.slug)} (${droplet.size.price_monthly:.2f}/month)")
    if droplet.region:
        console.print(f"  Region: {or_na(droplet.region.name)} ({or_na(droplet.region.slug)})")
    if droplet.kernel:
        console.print(f"  Kernel: {or_na(droplet.kernel.name)} {droplet.kernel.version or ''}".rstrip())
    if droplet.vpc_uuid:
        console.print(f"  VPC: {droplet.vpc_uuid}")

    if droplet.networks:
        console.print("  Networks:")
        for network in droplet.networks.v4:
            console.print(f"    {network.type or 'unknown'}: {or_na(network.ip_address)}")
        for network in droplet.networks.v6:
            console.print(f"    {network.type or 'unknown'} (v6): {or_na(network.ip_address)}")

    if droplet.tags:
        console.print(f"  Tags: {', '.join(droplet.tags)}")
    if droplet.volume_ids:
        console.print(f"  Volumes: {', '.join(droplet.volume_ids)}")


def get_command(droplet_id: int, output: OutputFormat = OutputFormat.table) -> None:
    """Show droplet details"""
    with api_errors("get droplet"):
        with DigitalOceanClient.from_config() as client:
            droplet = client.get_droplet(droplet_id)

    if output != OutputFormat.table:
        typer.echo(render_document(droplet, output))
        return

    print_droplet(droplet)


def create_command(
    name: str,
    region: str,
    size: str,
    image: str,
    tags: Optional[List[str]] = None,
    ssh_keys: Optional[List[str]] = None,
    volumes: Optional[List[str]] = None,
    user_data: Optional[str] = None,
    vpc_uuid: Optional[str] = None,
    backups: bool = False,
    ipv6: bool = False,
    monitoring: bool = False,
    private_networking: bool = False,
) -> None:
    """Create a new droplet"""
    request = CreateDropletRequest(
        name=name,
        region=region,
        size=size,
        image=image,
        tags=tuple(tags or ()),
        ssh_keys=tuple(ssh_keys or ()),
        volumes=tuple(volumes or ()),
        user_data=user_data,
        vpc_uuid=vpc_uuid,
        backups=backups,
        ipv6=ipv6,
        monitoring=monitoring,
        private_networking=private_networking,
    )

    with api_errors("create droplet"):
        with DigitalOceanClient.from_config() as client:
            droplet = client.create_droplet(request)

    console.print("[bold green]✓ Droplet created successfully!")
    console.print(f"  ID: {droplet.id}")
    console.print(f"  Name: {or_na(droplet.name)}")
    console.print(f"  Status: {or_na(droplet.status)}")
    console.print(f"  Region: {region}")
    console.print(f"  Size: {size}")


def delete_command(droplet_id: int, force: bool = False) -> None:
    """Delete a droplet"""
    if not force and not Confirm.ask(f"Are you sure you want to delete droplet {droplet_id}?", default=False):
        console.print("Cancelled")
        return

    with api_errors("delete droplet"):
        with DigitalOceanClient.from_config() as client:
            client.delete_droplet(droplet_id)

    logger.debug(f"Droplet {droplet_id} deleted")
    console.print(f"[bold green]✓ Droplet {droplet_id} deleted successfully")
