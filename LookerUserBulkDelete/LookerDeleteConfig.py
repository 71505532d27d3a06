# Looker User Bulk Delete Tool - Configuration
# Last Update: October 19, 2026

import argparse
import configparser
import os
from dataclasses import dataclass

import pwinput

from LookerUserBulkDelete.LookerDeleteErrors import ConfigurationError
from LookerUserBulkDelete.LookerDeleteLogging import infoLogger

USAGE = ("looker-delete-users --base-url <url> --client-id <id> --client-secret <secret> "
         "[--delay <ms>] [--force]")

@dataclass(frozen=True)
class DeleteConfig:
    baseUrl: str
    clientId: str
    clientSecret: str
    apiDelayMs: int = 10
    dryRun: bool = True
    maxRetries: int = 3
    retryDelayMs: int = 100
    pageSize: int = 50
    graceDelayMs: int = 5000
    callsPerSecond: int = 100

def parseArgs(argv=None):
    parser = argparse.ArgumentParser(
        prog="looker-delete-users",
        description="Delete Looker users who do not own any scheduled plans.",
        epilog="Add --force to actually delete users. Without this flag, the tool runs in dry-run mode.",
    )
    parser.add_argument("--base-url", dest="baseUrl")
    parser.add_argument("--client-id", dest="clientId")
    parser.add_argument("--client-secret", dest="clientSecret")
    parser.add_argument("--delay", dest="apiDelayMs", type=int, help="delay between API calls in milliseconds")
    parser.add_argument("--force", action="store_true", help="actually delete users")
    parser.add_argument("--config", dest="configPath", help="path to an INI configuration file")
    parser.add_argument("--prompt-secret", dest="promptSecret", action="store_true",
                        help="ask for the client secret with a masked prompt")
    return parser.parse_args(argv)

def readConfigurationFile(configPath):
    #######
    # Read the [Looker] section of the configuration file
    #######

    if not os.path.isfile(configPath):
        raise ConfigurationError(f"Configuration file not found: {configPath}")

    configFile = configparser.ConfigParser()
    try:
        configFile.read(configPath)
    except configparser.Error as e:
        raise ConfigurationError(f"Error reading configuration file: {e}") from e

    if "Looker" not in configFile.sections():
        raise ConfigurationError(f"Missing Looker section in configuration file {configPath}")

    section = configFile["Looker"]
    values = {}
    for key, field in (("baseurl", "baseUrl"), ("clientid", "clientId"), ("clientsecret", "clientSecret")):
        if key in section:
            values[field] = section[key]
    try:
        if "delay" in section:
            values["apiDelayMs"] = section.getint("delay")
        if "callspersecond" in section:
            values["callsPerSecond"] = section.getint("callspersecond")
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric value in configuration file: {e}") from e

    infoLogger.info(f"Configuration file read successfully: {configPath}")
    return values

def getClientSecret():
    print(f'')
    clientSecret = pwinput.pwinput(prompt='What is your Looker Client Secret? :', mask='*')
    print(f'')
    return clientSecret

def buildConfig(argv=None):
    #######
    # Combine the configuration file and command line into one DeleteConfig.
    # Command line values win over the configuration file.
    #######

    args = parseArgs(argv)

    values = {}
    if args.configPath:
        values.update(readConfigurationFile(args.configPath))

    for field in ("baseUrl", "clientId", "clientSecret", "apiDelayMs"):
        argValue = getattr(args, field)
        if argValue is not None:
            values[field] = argValue

    if args.promptSecret and not values.get("clientSecret"):
        values["clientSecret"] = getClientSecret()

    missing = [field for field in ("baseUrl", "clientId", "clientSecret") if not values.get(field)]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}. Usage: {USAGE}")

    if values.get("apiDelayMs", 0) < 0:
        raise ConfigurationError("Delay must not be negative.")
    if values.get("callsPerSecond", 1) < 1:
        raise ConfigurationError("Calls per second must be at least 1.")

    values["baseUrl"] = values["baseUrl"].rstrip("/")
    values["dryRun"] = not args.force

    return DeleteConfig(**values)
