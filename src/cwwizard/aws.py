"""AWS region and credential discovery.

Every lookup is a single blocking call that returns an empty result when
nothing is found. Failures are logged in debug mode and never raised, so
the wizard can fall back to asking the operator.
"""

from typing import Optional

import boto3
from botocore.credentials import Credentials
from botocore.exceptions import BotoCoreError, ClientError
from botocore.utils import InstanceMetadataRegionFetcher

from cwwizard.utils.constants import DEFAULT_IMDS_TIMEOUT
from cwwizard.utils.debug import debug_aws


def _session(profile: Optional[str] = None) -> Optional[boto3.Session]:
    try:
        if profile:
            return boto3.Session(profile_name=profile)
        return boto3.Session()
    except BotoCoreError as e:
        debug_aws("session creation failed", profile=profile, error=e)
        return None


def sdk_region() -> str:
    """Region from the default SDK session chain, or ""."""
    session = _session()
    if session is None:
        return ""
    return session.region_name or ""


def sdk_region_with_profile(profile: str) -> str:
    """Region configured for a shared-config profile, or ""."""
    session = _session(profile)
    if session is None:
        return ""
    return session.region_name or ""


def sdk_credentials() -> tuple[str, str, Optional[Credentials]]:
    """Resolve credentials from the default SDK session chain.

    Returns:
        (access_key, secret_key, credentials), or ("", "", None) if nothing
        resolves.
    """
    session = _session()
    if session is None:
        return "", "", None
    try:
        creds = session.get_credentials()
        if creds is None:
            return "", "", None
        frozen = creds.get_frozen_credentials()
    except (BotoCoreError, ClientError) as e:
        debug_aws("credential lookup failed", error=e)
        return "", "", None
    return frozen.access_key, frozen.secret_key, creds


def default_ec2_region(timeout: float = DEFAULT_IMDS_TIMEOUT) -> str:
    """Region of the EC2 instance we are running on, or "".

    Makes one metadata request with no retries. By the time an operator
    runs the wizard IMDS is expected to be up.
    """
    print("Trying to fetch the default region based on ec2 metadata...")
    fetcher = InstanceMetadataRegionFetcher(timeout=timeout, num_attempts=1)
    try:
        region = fetcher.retrieve_region()
    except BotoCoreError as e:
        debug_aws("metadata region lookup failed", error=e)
        region = None
    if not region:
        print("Could not get region from ec2 metadata...")
        return ""
    debug_aws("metadata region", region=region)
    return region
