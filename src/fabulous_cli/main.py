"""
Fabulous CLI Main Entry Point

Command-line interface for Fabulous registrar operations.
"""

import getpass
import logging
import os
import sys
from collections import Counter
from datetime import date
from pathlib import Path
from typing import List, Optional

import click

from fabulous_client import FabulousClient, __version__
from fabulous_client.configuration import DEFAULT_BASE_URL, Configuration
from fabulous_client.exceptions import (
    FabulousAuthenticationError,
    FabulousConfigurationError,
    FabulousError,
)
from fabulous_client.models import DomainSummary
from fabulous_client.resources.dns import DEFAULT_TTL, RECORD_TYPES
from fabulous_cli.config import CLIConfig, create_sample_config
from fabulous_cli.output import OutputFormatter, print_error, print_info, print_success


# Global state for the CLI session
class CLIState:
    formatter: Optional[OutputFormatter] = None


state = CLIState()


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--profile", "-p", default="default", help="Config profile to use")
@click.option("--username", "-u", help="API username (or use FABULOUS_USERNAME env)")
@click.option("--password", "-P", help="API password (or use FABULOUS_PASSWORD env)")
@click.option("--base-url", help="API base URL")
@click.option("--timeout", type=float, help="Total request timeout in seconds")
@click.option("--open-timeout", type=float, help="Connect timeout in seconds")
@click.option("--format", "-f", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config, profile, username, password, base_url, timeout, open_timeout, format, quiet, debug):
    """
    Fabulous CLI - Domain Portfolio Management

    Manage domains, nameservers and DNS records of a Fabulous account.

    \b
    Configuration:
      Use a config file at ~/.fabulous/config.yaml or specify options on command line.
      Run 'fabulous config init' to create a sample config file.

    \b
    Examples:
      fabulous domain list --expiring 30
      fabulous domain check example.com
      fabulous dns list example.com --type MX
    """
    # Setup logging
    if debug or os.environ.get("DEBUG_FABULOUS"):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    # Setup formatter
    state.formatter = OutputFormatter(format=format, quiet=quiet)

    # Load config
    if config:
        loaded_config = CLIConfig.from_file(Path(config), profile)
    else:
        loaded_config = CLIConfig.find_and_load(profile)

    if loaded_config is None:
        loaded_config = CLIConfig(profile=profile)

    # CLI options override config file, environment fills the gaps
    ctx.ensure_object(dict)
    ctx.obj["username"] = (
        username or loaded_config.credentials.username or os.environ.get("FABULOUS_USERNAME")
    )
    ctx.obj["password"] = (
        password or loaded_config.credentials.password or os.environ.get("FABULOUS_PASSWORD")
    )
    ctx.obj["base_url"] = base_url or loaded_config.api.base_url
    ctx.obj["timeout"] = timeout if timeout is not None else loaded_config.api.timeout
    ctx.obj["open_timeout"] = open_timeout if open_timeout is not None else loaded_config.api.open_timeout
    ctx.obj["profile"] = profile


def get_client(ctx) -> FabulousClient:
    """
    Create API client from the session options.

    Args:
        ctx: Click context

    Returns:
        Configured client
    """
    username = ctx.obj.get("username")
    if not username:
        print_error("No username specified. Use --username, FABULOUS_USERNAME or config file.")
        sys.exit(1)

    password = ctx.obj.get("password")
    if not password:
        password = getpass.getpass("Password: ")

    configuration = Configuration(
        username=username,
        password=password,
        base_url=ctx.obj.get("base_url", DEFAULT_BASE_URL),
        timeout=ctx.obj.get("timeout", 30.0),
        open_timeout=ctx.obj.get("open_timeout", 10.0),
    )

    try:
        return FabulousClient(configuration)
    except FabulousConfigurationError as e:
        print_error(f"Invalid configuration: {e}")
        sys.exit(1)


def fail(message: str) -> None:
    print_error(message)
    sys.exit(1)


def _report(ok: bool, done: str, failed: str) -> None:
    if ok:
        state.formatter.success(done)
    else:
        fail(failed)


# =============================================================================
# Config Commands
# =============================================================================

@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option("--path", "-p", type=click.Path(), default="~/.fabulous/config.yaml", help="Config file path")
def config_init(path):
    """Create sample configuration file."""
    path = Path(path).expanduser()

    # Create parent directory
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    path.write_text(create_sample_config())

    print_success(f"Created config file: {path}")
    print_info("Edit the file to configure your API credentials.")


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    info = {
        "profile": ctx.obj.get("profile"),
        "base_url": ctx.obj.get("base_url"),
        "username": ctx.obj.get("username") or "(not set)",
        "password": "(set)" if ctx.obj.get("password") else "(not set)",
        "timeout": ctx.obj.get("timeout"),
        "open_timeout": ctx.obj.get("open_timeout"),
    }
    state.formatter.output(info)


# =============================================================================
# Domain Commands
# =============================================================================

def days_until(expiry_date: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Days from today until an expiry date; None if missing or unparseable."""
    if not expiry_date:
        return None
    try:
        expiry = date.fromisoformat(expiry_date.strip()[:10])
    except ValueError:
        return None
    return (expiry - (today or date.today())).days


def filter_domains(
    domains: List[DomainSummary],
    name_filter: Optional[str] = None,
    expiring: Optional[int] = None,
    sort: str = "name",
) -> List[DomainSummary]:
    """Apply the list command's filter, expiry window and sort order."""
    if name_filter:
        domains = [d for d in domains if d.name and name_filter in d.name]

    if expiring is not None:
        selected = []
        for d in domains:
            days = days_until(d.expiry_date)
            if days is not None and 0 < days <= expiring:
                selected.append(d)
        domains = selected

    if sort == "expiry":
        return sorted(domains, key=lambda d: d.expiry_date or "9999-12-31")
    if sort == "status":
        return sorted(domains, key=lambda d: ((d.status or "").lower(), d.name or ""))
    return sorted(domains, key=lambda d: (d.name or "").lower())


@cli.group()
def domain():
    """Domain management commands."""
    pass


@domain.command("list")
@click.option("--page", type=int, help="Show a single page instead of all pages")
@click.option("--sort", type=click.Choice(["name", "expiry", "status"]), default="name", help="Sort by field")
@click.option("--filter", "name_filter", help="Filter domains by name (partial match)")
@click.option("--expiring", type=int, help="Show domains expiring within N days")
@click.pass_context
def domain_list(ctx, page, sort, name_filter, expiring):
    """List domains in the account."""
    client = get_client(ctx)
    try:
        domains = client.domains.list(page=page)
        domains = filter_domains(domains, name_filter=name_filter, expiring=expiring, sort=sort)
        state.formatter.output(domains, columns=["name", "status", "expiry_date", "auto_renew", "locked"])
    except FabulousAuthenticationError as e:
        fail(f"Authentication failed: {e}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("info")
@click.argument("name")
@click.pass_context
def domain_info(ctx, name):
    """
    Show domain information.

    NAME: Domain name to query.
    """
    client = get_client(ctx)
    try:
        info = client.domains.info(name)
        if info is None:
            fail(f"No information available for: {name}")
        state.formatter.output(info)
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("check")
@click.argument("name")
@click.pass_context
def domain_check(ctx, name):
    """
    Check domain availability.

    NAME: Domain name to check.
    """
    client = get_client(ctx)
    try:
        available = client.domains.check(name)
        if state.formatter.format == "json":
            state.formatter.output({"domain": name, "available": available})
        elif available is None:
            click.secho(f"Availability of {name} is unknown", fg="yellow")
        elif available:
            print_success(f"{name} is available")
        else:
            click.secho(f"{name} is not available", fg="yellow")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("register")
@click.argument("name")
@click.option("--years", "-y", type=int, default=1, help="Registration period in years")
@click.option("--ns", "-n", multiple=True, help="Nameserver (can specify multiple)")
@click.option("--whois-privacy", is_flag=True, help="Enable WHOIS privacy")
@click.option("--auto-renew", is_flag=True, help="Enable automatic renewal")
@click.pass_context
def domain_register(ctx, name, years, ns, whois_privacy, auto_renew):
    """
    Register a domain.

    NAME: Domain name to register.
    """
    client = get_client(ctx)
    try:
        ok = client.domains.register(
            name,
            years=years,
            nameservers=list(ns),
            whois_privacy=whois_privacy,
            auto_renew=auto_renew,
        )
        _report(ok, f"Domain registered: {name}", f"Registration failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("renew")
@click.argument("name")
@click.option("--years", "-y", type=int, default=1, help="Renewal period in years")
@click.pass_context
def domain_renew(ctx, name, years):
    """Renew a domain."""
    client = get_client(ctx)
    try:
        ok = client.domains.renew(name, years=years)
        _report(ok, f"Domain renewed: {name}", f"Renewal failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("transfer")
@click.argument("name")
@click.option("--auth-code", "-a", required=True, help="Transfer authorization code")
@click.pass_context
def domain_transfer(ctx, name, auth_code):
    """Transfer a domain into the account."""
    client = get_client(ctx)
    try:
        ok = client.domains.transfer_in(name, auth_code)
        _report(ok, f"Transfer requested: {name}", f"Transfer failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("lock")
@click.argument("name")
@click.pass_context
def domain_lock(ctx, name):
    """Lock a domain against transfers."""
    client = get_client(ctx)
    try:
        _report(client.domains.lock(name), f"Domain locked: {name}", f"Lock failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("unlock")
@click.argument("name")
@click.pass_context
def domain_unlock(ctx, name):
    """Unlock a domain."""
    client = get_client(ctx)
    try:
        _report(client.domains.unlock(name), f"Domain unlocked: {name}", f"Unlock failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("autorenew")
@click.argument("name")
@click.argument("setting", type=click.Choice(["on", "off"]))
@click.pass_context
def domain_autorenew(ctx, name, setting):
    """Turn automatic renewal on or off."""
    client = get_client(ctx)
    try:
        ok = client.domains.set_auto_renew(name, enabled=setting == "on")
        _report(ok, f"Auto-renew {setting}: {name}", f"Auto-renew update failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("privacy")
@click.argument("name")
@click.argument("setting", type=click.Choice(["on", "off"]))
@click.pass_context
def domain_privacy(ctx, name, setting):
    """Turn WHOIS privacy on or off."""
    client = get_client(ctx)
    try:
        if setting == "on":
            ok = client.domains.enable_whois_privacy(name)
        else:
            ok = client.domains.disable_whois_privacy(name)
        _report(ok, f"WHOIS privacy {setting}: {name}", f"WHOIS privacy update failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@domain.command("summary")
@click.pass_context
def domain_summary(ctx):
    """Show portfolio summary."""
    client = get_client(ctx)
    try:
        domains = client.domains.all()
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()

    by_year = Counter()
    expiring = {30: 0, 90: 0}
    for d in domains:
        days = days_until(d.expiry_date)
        if days is None:
            by_year["Unknown"] += 1
            continue
        by_year[d.expiry_date.strip()[:4]] += 1
        for limit in expiring:
            if 0 < days <= limit:
                expiring[limit] += 1

    state.formatter.output({
        "total_domains": len(domains),
        "by_expiry_year": dict(sorted(by_year.items())),
        "expiring_30_days": expiring[30],
        "expiring_90_days": expiring[90],
    })


# =============================================================================
# Nameserver Commands
# =============================================================================

@cli.group()
def nameservers():
    """Nameserver commands."""
    pass


@nameservers.command("get")
@click.argument("name")
@click.pass_context
def nameservers_get(ctx, name):
    """Show the nameservers of a domain."""
    client = get_client(ctx)
    try:
        servers = client.domains.get_nameservers(name)
        if not servers:
            state.formatter.info(f"No nameservers found for: {name}")
            return
        if state.formatter.format == "json":
            state.formatter.output(servers)
        else:
            for index, ns in enumerate(servers, start=1):
                click.echo(f"{index}. {ns}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@nameservers.command("set")
@click.argument("name")
@click.argument("servers", nargs=-1, required=True)
@click.pass_context
def nameservers_set(ctx, name, servers):
    """
    Replace the nameservers of a domain.

    NAME: Domain name. SERVERS: Two or more nameserver hostnames.
    """
    if len(servers) < 2:
        fail("At least 2 nameservers required")

    client = get_client(ctx)
    try:
        ok = client.domains.set_nameservers(name, list(servers))
        _report(ok, f"Nameservers updated: {name}", f"Nameserver update failed: {name}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


# =============================================================================
# DNS Commands
# =============================================================================

_RECORD_COLUMNS = {
    "A": ["id", "hostname", "ip_address", "ttl"],
    "AAAA": ["id", "hostname", "ipv6_address", "ttl"],
    "CNAME": ["id", "alias", "target", "ttl"],
    "MX": ["id", "hostname", "priority", "ttl"],
    "TXT": ["id", "hostname", "text", "ttl"],
}

record_type = click.Choice(RECORD_TYPES, case_sensitive=False)


@cli.group()
def dns():
    """DNS record commands."""
    pass


@dns.command("list")
@click.argument("name")
@click.option("--type", "-t", "rtype", type=record_type, help="Only records of this type")
@click.pass_context
def dns_list(ctx, name, rtype):
    """List all DNS records of a domain."""
    client = get_client(ctx)
    try:
        records = client.dns.list_records(name, type=rtype.upper() if rtype else None)
        state.formatter.output(records, columns=["id", "type", "name", "value", "ttl", "priority"])
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@dns.command("records")
@click.argument("rtype", metavar="TYPE", type=record_type)
@click.argument("name")
@click.pass_context
def dns_records(ctx, rtype, name):
    """List records of one TYPE for a domain."""
    rtype = rtype.upper()
    client = get_client(ctx)
    try:
        records = getattr(client.dns, f"{rtype.lower()}_records")(name)
        state.formatter.output(records, columns=_RECORD_COLUMNS[rtype])
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


def _record_fields(rtype: str, hostname, value, priority, ttl, require: bool) -> dict:
    """Keyword arguments for a typed add/update call."""
    if rtype == "MX":
        fields = {"hostname": hostname, "priority": priority}
    elif rtype == "CNAME":
        fields = {"alias_name": hostname, "target": value}
    elif rtype == "A":
        fields = {"hostname": hostname, "ip_address": value}
    elif rtype == "AAAA":
        fields = {"hostname": hostname, "ipv6_address": value}
    else:
        fields = {"hostname": hostname, "text": value}

    if require:
        missing = [k for k, v in fields.items() if v is None]
        if missing:
            fail(f"Missing options for {rtype} record: {', '.join(missing)}")
        fields["ttl"] = ttl if ttl is not None else DEFAULT_TTL
    else:
        fields["ttl"] = ttl
    return fields


@dns.command("add")
@click.argument("rtype", metavar="TYPE", type=record_type)
@click.argument("name")
@click.option("--hostname", "-H", help="Record hostname (CNAME: alias, MX: mail server)")
@click.option("--value", "-v", help="Address, target or text value")
@click.option("--priority", type=int, help="MX priority")
@click.option("--ttl", type=int, help=f"TTL in seconds (default {DEFAULT_TTL})")
@click.pass_context
def dns_add(ctx, rtype, name, hostname, value, priority, ttl):
    """Add a TYPE record to a domain."""
    rtype = rtype.upper()
    fields = _record_fields(rtype, hostname, value, priority, ttl, require=True)

    client = get_client(ctx)
    try:
        ok = getattr(client.dns, f"add_{rtype.lower()}_record")(name, **fields)
        _report(ok, f"{rtype} record added to {name}", f"Failed to add {rtype} record")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@dns.command("update")
@click.argument("rtype", metavar="TYPE", type=record_type)
@click.argument("name")
@click.argument("record_id")
@click.option("--hostname", "-H", help="Record hostname (CNAME: alias, MX: mail server)")
@click.option("--value", "-v", help="Address, target or text value")
@click.option("--priority", type=int, help="MX priority")
@click.option("--ttl", type=int, help="TTL in seconds")
@click.pass_context
def dns_update(ctx, rtype, name, record_id, hostname, value, priority, ttl):
    """Update a TYPE record; only given options are changed."""
    rtype = rtype.upper()
    fields = _record_fields(rtype, hostname, value, priority, ttl, require=False)

    client = get_client(ctx)
    try:
        ok = getattr(client.dns, f"update_{rtype.lower()}_record")(name, record_id=record_id, **fields)
        _report(ok, f"{rtype} record {record_id} updated", f"Failed to update {rtype} record {record_id}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


@dns.command("delete")
@click.argument("rtype", metavar="TYPE", type=record_type)
@click.argument("name")
@click.argument("record_id")
@click.option("--confirm", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def dns_delete(ctx, rtype, name, record_id, confirm):
    """Delete a TYPE record from a domain."""
    rtype = rtype.upper()
    if not confirm:
        if not click.confirm(f"Delete {rtype} record {record_id} from {name}?"):
            return

    client = get_client(ctx)
    try:
        ok = getattr(client.dns, f"delete_{rtype.lower()}_record")(name, record_id)
        _report(ok, f"{rtype} record {record_id} deleted", f"Failed to delete {rtype} record {record_id}")
    except FabulousError as e:
        fail(f"Command failed: {e}")
    finally:
        client.close()


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Main entry point."""
    try:
        cli()
    except FabulousError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
