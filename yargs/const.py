VERSION = (0, 1, 0)
VERSION_STR = f"{VERSION[0]}.{VERSION[1]}.{VERSION[2]}{'-' +  str(VERSION[-1]) if len(VERSION) > 3 else ''}"

ARGV0 = "yargs"
DESCRIPTION = "A consuming command-line argument matcher that never barks about unexpected arguments"
DEFAULT_SEPARATOR = "--"
EXTRA_ARGS_ENV = "YARGS_EXTRA_ARGS"
