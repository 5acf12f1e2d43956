#!/usr/bin/env python3

import argparse
import sys

from rmsettings import settings

def hostname_arg(value):
    value = value.strip()
    if not value:
        raise argparse.ArgumentTypeError("hostname can't be empty")
    return value

def make_parser():
    parser = argparse.ArgumentParser(prog = 'update-settings')
    parser.add_argument('--hostname', dest = 'hostname', type = hostname_arg,
                        required = True,
                        help = 'Set the hostname')
    return parser

def parse_args(argv = None):
    return make_parser().parse_args(argv)

def main(argv = None, path = settings.SETTINGS_PATH):
    args = parse_args(argv)

    try:
        doc = settings.load(path)
        settings.apply(doc, args.hostname)
        settings.save(path, doc)
    except settings.SettingsError as e:
        print("ERROR: %s" % e, file = sys.stderr)
        return 1

    print("Updated %s successfully." % path)
    return 0

def run():
    sys.exit(main())

if __name__ == '__main__':
    run()
