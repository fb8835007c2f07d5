import logging

import click
import questionary
import yaml

from rundown import storage
from rundown.algorithms import get_algorithms
from rundown.app import export_rundown, load_namelist, main, print_rundown_summary
from rundown.config import ProjectConfig, resolve_config_paths

from pathlib import Path
from pydantic import ValidationError


def load_config(ctx, param, value: Path) -> ProjectConfig:
    if value is None:
        return None
    try:
        with open(value, "r") as f:
            data = yaml.safe_load(f) or {}
        config = ProjectConfig(**resolve_config_paths(data, value))
        config.validate_paths()
        return config
    except (ValidationError, FileNotFoundError, ValueError) as e:
        raise click.BadParameter(f"Invalid config: {e}")
    except (OSError, yaml.YAMLError) as e:
        raise click.BadParameter(f"Failed to load config: {e}")


@click.command(context_settings={"max_content_width": 120})
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    callback=load_config,
    help="Path to competition configuration file.",
)
@click.option(
    "--load",
    "data_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a saved namelist document.",
)
@click.option(
    "--algorithm",
    type=click.Choice(list(get_algorithms().keys())),
    default="greedy",
    help="Which rundown generation algorithm to use.",
)
@click.option(
    "--event",
    "event_code",
    default=None,
    help="Reschedule one event only, after the heats of other events.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Folder for exported rundown files.",
)
@click.option(
    "--interactive",
    type=click.BOOL,
    default=False,
    help="Edit the rundown interactively after loading.",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log scheduling details.",
)
def cli(
    config: ProjectConfig,
    data_file: Path,
    algorithm: str,
    event_code: str | None,
    output_dir: Path | None,
    interactive: bool,
    verbose: bool,
):

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s - %(message)s",
    )

    if config is None and data_file is None:
        raise click.BadParameter("Must supply either --config or --load.")
    if config is not None and data_file is not None:
        raise click.BadParameter("Cannot use --config and --load together.")

    if config:
        name = config.name
        data_file = config.data_file
        output_dir = output_dir or config.output_dir
        namelist = load_namelist(
            data_file=config.data_file,
            roster_csv=config.roster_csv,
            rundown=config.rundown,
            event_rundowns=config.event_rundowns,
            entry_codes=config.entry_codes,
        )
    else:
        name = data_file.stem
        namelist = load_namelist(data_file=data_file)

    if not interactive:
        main(
            algorithm=algorithm,
            namelist=namelist,
            name=name,
            event_code=event_code,
            output_dir=output_dir,
        )
        storage.save_namelist(namelist, data_file)
        print(f"  Namelist saved to {data_file}\n")
        return

    run_interactive(namelist, name, data_file, algorithm, output_dir)


def run_interactive(namelist, name, data_file, algorithm, output_dir):
    """Menu loop for manual rundown edits."""

    print(f"\nNamelist loaded: {name} ({len(namelist.participants)} participants)")

    choices = [
        "Generate rundown",
        "Swap two entries",
        "Move an entry",
        "Undo last edit",
        "Set an entry code",
        "Rename a division",
        "Delete a division",
        "Export data",
        "Quit",
    ]

    while True:

        print(f"\n---")

        choice = questionary.select(
            "\nAction:",
            choices=choices,
            qmark="",
            instruction=" ",
        ).ask()

        if choice == "Generate rundown":

            event_choices = ["All events"] + [e.code for e in namelist.events]
            selected = questionary.select(
                "\nEvent:",
                choices=event_choices,
                qmark="",
                instruction=" ",
            ).ask()
            event_code = None if selected == "All events" else selected
            main(
                algorithm=algorithm,
                namelist=namelist,
                name=name,
                event_code=event_code,
                export=False,
            )

        if choice == "Swap two entries":

            first = _ask_participant(namelist, "\nFirst entry:")
            second = _ask_participant(namelist, "\nSecond entry:")
            if first is None or second is None:
                continue
            namelist.swap_participants(first.id, second.id)
            print(
                f"\n  Swapped {first} (heat {first.heat}, station {first.station})"
                f" with {second} (heat {second.heat}, station {second.station})"
            )

        if choice == "Move an entry":

            participant = _ask_participant(namelist, "\nEntry:")
            if participant is None:
                continue
            heat = questionary.text(
                "\nHeat:", qmark="", validate=lambda val: val.isdigit()
            ).ask()
            station = questionary.text(
                "\nStation:", qmark="", validate=lambda val: val.isdigit()
            ).ask()
            time = questionary.text(
                "\nTime (HH:MM):",
                qmark="",
                default=participant.schedule_time or "",
            ).ask()
            namelist.update_participant(
                participant.id,
                heat=int(heat),
                station=int(station),
                schedule_time=time,
            )
            print(f"\n  {participant} moved to heat {heat}, station {station}")

        if choice == "Undo last edit":

            description = namelist.undo()
            print(f"\n  Undone: {description}" if description else "\n  Nothing to undo.")

        if choice == "Set an entry code":

            event_code = questionary.autocomplete(
                "\nEvent:",
                choices=[e.code for e in namelist.events],
                qmark="",
                ignore_case=True,
            ).ask()
            division = questionary.select(
                "\nDivision:",
                choices=[d.name for d in namelist.divisions],
                qmark="",
                instruction=" ",
            ).ask()
            prefix = questionary.text("\nPrefix:", qmark="").ask()
            namelist.set_entry_code(event_code, division, prefix.strip().upper())

        if choice == "Rename a division":

            old_name = questionary.select(
                "\nDivision:",
                choices=[d.name for d in namelist.divisions],
                qmark="",
                instruction=" ",
            ).ask()
            new_name = questionary.text("\nNew name:", qmark="").ask()
            namelist.rename_division(old_name, new_name.strip())

        if choice == "Delete a division":

            division = questionary.select(
                "\nDivision:",
                choices=[d.name for d in namelist.divisions],
                qmark="",
                instruction=" ",
            ).ask()
            if questionary.confirm(f"\nDelete {division}?", qmark="").ask():
                namelist.delete_division(division)

        if choice == "Export data":

            print_rundown_summary(namelist)
            export_rundown(namelist, name, output_dir=output_dir)
            storage.save_namelist(namelist, data_file)
            print(f"\n  Namelist saved to {data_file}\n")
            return

        if choice == "Quit":
            print(f"\nProgram terminated.\n")
            return


def participant_choices(namelist):
    """Maps a unique prompt label to each participant, in store order."""
    labels = {}
    for p in namelist.participants:
        code = namelist.participant_entry_code(p)
        name = " / ".join(p.name.splitlines())
        labels[f"{code} {name} ({p.event_code}) [{p.id}]"] = p
    return labels


def _ask_participant(namelist, prompt):

    labels = participant_choices(namelist)
    while True:
        label = questionary.autocomplete(
            prompt,
            choices=list(labels),
            qmark="",
            ignore_case=True,
        ).ask()
        if label is None:
            return None
        if label in labels:
            return labels[label]
        print(f"\n  No entry matches {label!r}.")


if __name__ == "__main__":
    cli()
