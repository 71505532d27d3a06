# Looker User Bulk Delete Tool
# Last Update: October 19, 2026

import os
import sys
import time
from dataclasses import dataclass

from LookerUserBulkDelete import __version__
from LookerUserBulkDelete.LookerClient import LookerClient
from LookerUserBulkDelete.LookerDeleteConfig import buildConfig
from LookerUserBulkDelete.LookerDeleteErrors import ConfigurationError, LookerDeleteError
from LookerUserBulkDelete.LookerDeleteLogging import detailedFailureLogger, infoLogger, setupLogging

@dataclass
class DeleteStats:
    total: int = 0
    deleted: int = 0
    wouldDelete: int = 0
    hasScheduledPlans: int = 0
    errors: int = 0
    totalPlans: int = 0
    planOwners: int = 0

def printWelcome(version):
    #######
    # Print the welcome message
    #######

    startTime = int(time.time() * 1000)

    print(f'')
    print(f'********************************************')
    print(f'Looker User Delete Utility - version {version}')
    print(f'********************************************')
    print(f'')
    print(f'Actions will be written to the log file LookerUserDelete.log')
    print(f'')

    return startTime

def printMode(config):
    if config.dryRun:
        print(f'RUNNING IN DRY-RUN MODE. No users will be deleted.')
        print(f'Add --force to actually delete users.')
        print(f'')
        infoLogger.info(f"Running in dry-run mode.")
    else:
        print(f'WARNING: RUNNING IN FORCE MODE. Users will be permanently deleted!')
        print(f'')
        infoLogger.info(f"Running in force mode.")

def collectPlanOwners(client, config):
    ######
    # Walk every page of scheduled plans and collect the ids of users who own one
    ######

    print(f'Fetching all scheduled plans to identify users who own plans...')

    planOwners = set()
    offset = 0
    totalPlans = 0
    hasMore = True

    while hasMore:
        plans, hasMore = client.getScheduledPlans(config.pageSize, offset)

        for plan in plans:
            if plan.get('user_id'):
                planOwners.add(plan['user_id'])

        totalPlans += len(plans)
        offset += config.pageSize

        if hasMore:
            print(f'Waiting {config.apiDelayMs}ms before next batch of plans...')
            time.sleep(config.apiDelayMs / 1000)

    print(f'Found {totalPlans} scheduled plans owned by {len(planOwners)} unique users')
    infoLogger.info(f"Found {totalPlans} scheduled plans owned by {len(planOwners)} unique users.")

    return frozenset(planOwners), totalPlans

def processUsers(users, client, stats, planOwners, dryRun):
    ######
    # Skip plan owners, delete (or count) everyone else in one page of users.
    # Any failed delete is counted and the page carries on.
    ######

    for user in users:
        userId = user['id']
        print(f"Processing user: {user.get('display_name')} ({user.get('email')})")

        if userId in planOwners:
            print(f'  User owns scheduled plans, skipping')
            infoLogger.info(f"SKIPPING: user {userId} ({user.get('email')}) owns scheduled plans.")
            stats.hasScheduledPlans += 1
            continue

        if dryRun:
            print(f"  DRY RUN: Would delete user {userId} ({user.get('email')})")
            infoLogger.info(f"DRY RUN: would delete user {userId} ({user.get('email')}).")
            stats.wouldDelete += 1
            continue

        try:
            client.deleteUser(userId)
        except Exception as e:
            print(f'Error processing user {userId}: {e}')
            infoLogger.error(f"Error deleting user {userId} - see LookerUserDeleteFailuresDetail.log for more information.")
            detailedFailureLogger.error(f"Failed to delete user {userId}: {e}")
            stats.errors += 1
        else:
            print(f'  User successfully deleted')
            stats.deleted += 1

def runDelete(config, client=None):
    #######
    # Collect plan owners, then page through every user.
    # Errors raised here (login, page fetches) end the run.
    #######

    printMode(config)
    if not config.dryRun:
        # Give the operator a chance to cancel
        print(f'Starting in {config.graceDelayMs // 1000} seconds...')
        time.sleep(config.graceDelayMs / 1000)

    print(f'Looking for users to delete...')

    if client is None:
        client = LookerClient(config)
    stats = DeleteStats()

    planOwners, stats.totalPlans = collectPlanOwners(client, config)
    stats.planOwners = len(planOwners)

    offset = 0
    hasMore = True
    while hasMore:
        users, hasMore = client.getUsers(config.pageSize, offset)
        stats.total += len(users)

        processUsers(users, client, stats, planOwners, config.dryRun)

        offset += config.pageSize
        if hasMore:
            print(f'Waiting {config.apiDelayMs}ms before next batch...')
            time.sleep(config.apiDelayMs / 1000)

    return stats

def printSummary(stats, dryRun):
    print(f'')
    print(f'-----------------------------')
    print(f'---------- Summary ----------')
    print(f'-----------------------------')
    print(f' Total users: {stats.total}')
    print(f' Users with scheduled plans: {stats.hasScheduledPlans}')
    if dryRun:
        print(f' Users that would be deleted: {stats.wouldDelete}')
    else:
        print(f' Users deleted: {stats.deleted}')
    print(f' Errors: {stats.errors}')
    print(f'-----------------------------')

    infoLogger.info(f"Total users: {stats.total}")
    infoLogger.info(f"Users with scheduled plans: {stats.hasScheduledPlans}")
    if dryRun:
        infoLogger.info(f"Users that would be deleted: {stats.wouldDelete}")
    else:
        infoLogger.info(f"Users deleted: {stats.deleted}")
    infoLogger.info(f"Errors: {stats.errors}")

    if dryRun:
        print(f'')
        print(f'This was a dry run. No users were actually deleted.')
        print(f'Run with --force to actually delete users.')

def printEnding(startTime, endTime):
    #######
    # Print the ending message
    #######

    print(f'')
    print(f'Looker User Delete Utility - Ending')
    infoLogger.info(f"Ending delete tool: {endTime}")

    totalTime = endTime - startTime
    print(f'Total time taken: {totalTime} ms')
    infoLogger.info(f"Total time taken: {totalTime} ms")

def main(argv=None):
    startTime = printWelcome(__version__)

    try:
        config = buildConfig(argv)
    except ConfigurationError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    setupLogging(os.getcwd())
    infoLogger.info(f"Looker User Delete Utility - version {__version__}")
    infoLogger.info(f"Starting delete tool: {startTime}")

    try:
        stats = runDelete(config)
    except LookerDeleteError as e:
        print(f'Error: {e}', file=sys.stderr)
        infoLogger.error(f"Error: {e}")
        return 1

    printSummary(stats, config.dryRun)
    printEnding(startTime, int(time.time() * 1000))
    return 0

if __name__ == "__main__":
    sys.exit(main())
