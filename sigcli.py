import logging
import sys

import click

from s3signer import compute, verify
from s3signer.config import DEFAULT_CONFIG_FILE, credentials_from_boto3, load_profile
from s3signer.exceptions import S3SignerError
from s3signer.models import Credentials
from s3signer.printer import format_output
from s3signer.request import build_request, load_request_file, request_hints


@click.group(context_settings=dict(help_option_names=['--help']))
@click.option('--config', 'config_path', default=DEFAULT_CONFIG_FILE,
              help='Path to configuration file')
@click.option('--profile', default=None, help='Profile name from the configuration file')
@click.option('--aws-profile', default=None, help='AWS shared-credentials profile (boto3)')
@click.option('--access-key', envvar='S3SIGNER_ACCESS_KEY', default=None)
@click.option('--secret-key', envvar='S3SIGNER_SECRET_KEY', default=None)
@click.option('--region', default=None, help='Signing region (default: from request, else us-east-1)')
@click.option('--format', 'outfmt', default='json', type=click.Choice(['json', 'yaml', 'table']))
@click.option('-v', '--verbose', is_flag=True, help='Debug logging')
@click.pass_context
def cli(ctx, config_path, profile, aws_profile, access_key, secret_key, region, outfmt, verbose):
    """Compute and check AWS SigV4 signatures of S3 requests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(asctime)s][%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )
    ctx.obj = {
        'config_path': config_path,
        'profile': profile,
        'aws_profile': aws_profile,
        'access_key': access_key,
        'secret_key': secret_key,
        'region': region,
        'outfmt': outfmt,
    }


def request_options(f):
    f = click.option('--request-file', type=click.Path(dir_okay=False),
                     help='YAML file with method, url and headers')(f)
    f = click.option('-H', '--header', 'headers', multiple=True,
                     help="Request header as 'Name: value' (repeatable)")(f)
    f = click.option('-X', '--method', default='GET', help='HTTP method')(f)
    f = click.option('--url', default=None, help='Request URL')(f)
    return f


def _load_request(url, method, headers, request_file):
    if request_file:
        return load_request_file(request_file)
    if not url:
        raise click.UsageError('Either --url or --request-file is required')
    return build_request(method, url, list(headers))


def _resolve_credentials(obj, request):
    if obj['access_key'] and obj['secret_key']:
        creds = Credentials(obj['access_key'], obj['secret_key'])
    elif obj['profile']:
        creds = load_profile(obj['profile'], obj['config_path'])
    else:
        creds = credentials_from_boto3(obj['aws_profile'])

    region = obj['region'] or request_hints(request)['region']
    if region:
        return Credentials(creds.access_key_id, creds.secret_access_key, region)
    return creds


def _fail(e):
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@cli.command('compute')
@request_options
@click.pass_context
def compute_cmd(ctx, url, method, headers, request_file):
    """Compute the signature and every intermediate value."""
    try:
        request = _load_request(url, method, headers, request_file)
        result = compute(request, _resolve_credentials(ctx.obj, request))
    except S3SignerError as e:
        _fail(e)
    format_output(result.to_dict(), ctx.obj['outfmt'])


@cli.command('verify')
@request_options
@click.pass_context
def verify_cmd(ctx, url, method, headers, request_file):
    """Recompute the signature and compare it with the request's own.

    Exits with status 2 when the signatures differ.
    """
    try:
        request = _load_request(url, method, headers, request_file)
        result = compute(request, _resolve_credentials(ctx.obj, request))
    except S3SignerError as e:
        _fail(e)
    outcome = verify(request, result)
    data = outcome.to_dict()
    data['warnings'] = [str(w) for w in result.warnings]
    format_output(data, ctx.obj['outfmt'])
    if not outcome.signature_matches:
        ctx.exit(2)


@cli.command('hints')
@request_options
@click.pass_context
def hints_cmd(ctx, url, method, headers, request_file):
    """Show the endpoint, access key id, region and bucket read off a request."""
    try:
        request = _load_request(url, method, headers, request_file)
    except S3SignerError as e:
        _fail(e)
    format_output(request_hints(request), ctx.obj['outfmt'])


if __name__ == '__main__':
    cli()
