"""
Account command implementation for do-cli
"""
import typer

from ..api.client import DigitalOceanClient
from ..utils import OutputFormat, or_na, render_document
from .base import api_errors, console


def account_info_command(output: OutputFormat = OutputFormat.table) -> None:
    """Show account information"""
    with api_errors("get account"):
        with DigitalOceanClient.from_config() as client:
            account = client.get_account()

    if output != OutputFormat.table:
        typer.echo(render_document(account, output))
        return

    console.print("[bold]Account Information:")
    console.print(f"  Email: {or_na(account.email)}")
    console.print(f"  UUID: {or_na(account.uuid)}")
    console.print(f"  Status: {or_na(account.status)}")
    if account.status_message:
        console.print(f"  Status Message: {account.status_message}")
    console.print(f"  Email Verified: {'true' if account.email_verified else 'false'}")
    console.print(f"  Droplet Limit: {account.droplet_limit}")
    console.print(f"  Floating IP Limit: {account.floating_ip_limit}")
    console.print(f"  Volume Limit: {account.volume_limit}")
    if account.team:
        console.print(f"  Team: {or_na(account.team.name)} ({or_na(account.team.uuid)})")
