from caterlead.cli.commands import app


def main():
    app(prog_name="caterlead")


if __name__ == "__main__":
    main()
