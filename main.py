from rich.pretty import pprint

from bosun import *
from bosun import ui

runner = Runner()
runner.program("name", "remotes")
runner.program("version", "0.1.0")
runner.program("description", "Manage a list of remotes")
runner.program("help", "Author", "Eiko Reishin")

runner.global_option("-c", "--config FILE", "Load config data for your commands to use")

add = runner.command("remote add")
add.syntax = "remotes remote add <name> <url> [options]"
add.summary = "Add a remote"
add.option("-f", "--fetch", "Fetch the remote after adding it")
add.option("--tags TAGS", list, "Import the given tags")
add.option("--mirror MODE", ["fetch", "push"], "Set up the remote as a mirror")
add.example("Add a remote and fetch it", "remotes remote add origin git@host:repo --fetch")


@add.when_called
def callback(args, options):
    name, url = args
    ui.log("add", name, url)
    pprint(options)


runner.alias_command("ra", "remote add", "--fetch")

if __name__ == '__main__':
    runner.run()
