"""Command line utility to infer GraphQL schemas from JSON documents and query them."""

import argparse
import logging
import tempfile
import sys
import os
import json
from jsonql import _version

ARG_TYPES = {'str': str, 'int': int, 'float': float}


def load_commands():
    """Load the commands from the commands.json file."""
    commands_path = os.path.join(os.path.dirname(__file__), 'commands.json')
    with open(commands_path, 'r', encoding='utf-8') as f:
        return json.load(f)

def create_subparsers(subparsers, commands):
    """Create subparsers for the commands."""
    for command in commands:
        cmd_parser = subparsers.add_parser(command['command'], help=command['description'])
        for arg in command['args']:
            kwargs = {
                'help': arg['help'],
            }
            if 'nargs' in arg:
                kwargs['nargs'] = arg['nargs']
            if 'choices' in arg:
                kwargs['choices'] = arg['choices']
            if 'default' in arg:
                kwargs['default'] = arg['default']
            if arg['type'] == 'bool':
                kwargs['action'] = 'store_true'
            else:
                kwargs['type'] = ARG_TYPES[arg['type']]
            carg = cmd_parser.add_argument(arg['name'], **kwargs)
            if arg['name'].startswith('-'):
                carg.required = arg.get('required', False)

def function_args(command, args, input_file_path, output_file_path):
    """Map the parsed arguments onto the keyword arguments of a command function."""
    func_args = {}
    for name, source in command['function']['args'].items():
        if source == 'input_file_path':
            func_args[name] = input_file_path
        elif source == 'output_file_path':
            func_args[name] = output_file_path
        elif source.startswith('args.'):
            if hasattr(args, source[5:]):
                func_args[name] = getattr(args, source[5:])
        else:
            func_args[name] = source
    return func_args

def dynamic_import(module, func):
    """Dynamically import a module and function."""
    mod = __import__(module, fromlist=[func])
    return getattr(mod, func)

def main():
    """Main function for the command line utility."""
    commands = load_commands()
    parser = argparse.ArgumentParser(description='Infer GraphQL schemas from JSON documents and query them.')
    parser.add_argument('--version', action='store_true', help='Print the version of jsonql.')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level.')

    subparsers = parser.add_subparsers(dest='command')
    create_subparsers(subparsers, commands)

    args = parser.parse_args()

    if getattr(args, 'version', False):
        print(f'jsonql {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(level=getattr(args, 'log_level', None) or 'WARNING',
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    temp_input = None
    try:
        command = next((cmd for cmd in commands if cmd['command'] == args.command), None)
        if not command:
            print(f"Error: Command {args.command} not found.")
            sys.exit(1)

        input_file_path = getattr(args, 'input', None)
        skip_input_file_handling = command.get('skip_input_file_handling', False)
        if not skip_input_file_handling:
            if input_file_path is None:
                temp_input = tempfile.NamedTemporaryFile(delete=False, mode='w', encoding='utf-8')
                input_file_path = temp_input.name
                # read to EOF
                s = sys.stdin.read()
                while s:
                    temp_input.write(s)
                    s = sys.stdin.read()
                temp_input.flush()
                temp_input.close()

        temp_output = None
        output_file_path = ''
        if 'out' in args:
            output_file_path = args.out
            if output_file_path is None:
                temp_output = tempfile.NamedTemporaryFile(delete=False)
                output_file_path = temp_output.name
                temp_output.close()

        module_name, func_name = command['function']['name'].rsplit('.', 1)
        func = dynamic_import(module_name, func_name)
        func(**function_args(command, args, input_file_path, output_file_path))

        if temp_output:
            with open(output_file_path, 'r', encoding='utf-8') as f:
                sys.stdout.write(f.read())
            os.remove(output_file_path)

    except Exception as e:  # pylint: disable=broad-except
        print("Error: ", str(e))
        sys.exit(1)
    finally:
        if temp_input:
            try:
                os.remove(temp_input.name)
            except OSError as e:
                print(f"Error: Could not delete temporary input file {temp_input.name}. {e}")

if __name__ == "__main__":
    main()
