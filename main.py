from rich.pretty import pprint

from smoothop import program

cli = program("pkg")
cli.version("0.1.0")
cli.option("-g, --global", "Act on the global scope")

cli.command("install <name> [dir]", "Install a package. Fetches it when missing.", alias="i")
cli.option("-f, --force", "Reinstall when present", False)
cli.example("install rich --force")
cli.action(lambda name, dir, flags: pprint({"name": name, "dir": dir, "flags": flags}))

cli.command("remote add <name> <url>", "Register a package index.")
cli.action(lambda name, url, flags: pprint({"name": name, "url": url, "flags": flags}))


if __name__ == '__main__':
    cli.parse()
