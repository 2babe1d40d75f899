"""Command-line interface for craft-cms."""

import argparse
import logging
import sys
from pathlib import Path

from craft_cms.clients import ClientError, StoreClient
from craft_cms.forms import AnimalForm, PostForm, ProducerForm, SiteImageForm
from craft_cms.managers import (
    AnimalsManager,
    CollectionManager,
    LocalStorage,
    ManagerError,
    PostsManager,
    ProducerCounterMaintainer,
    ProducersManager,
    SiteImagesManager,
)
from craft_cms.registry import PAGES, section_options
from craft_cms.settings import Settings, get_settings
from schemas import Animal, Post, Producer, SiteImage, category_label

COLLECTION_CHOICES = ["posts", "producers", "animals", "images"]

FORMS = {
    "posts": PostForm,
    "producers": ProducerForm,
    "animals": AnimalForm,
    "images": SiteImageForm,
}

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def open_store(settings: Settings) -> StoreClient | None:
    """Create a store client, or log why none can be created."""
    if not settings.is_configured:
        logger.error(
            "Record store is not configured: set CRAFT_CMS_STORE_URL and CRAFT_CMS_STORE_KEY"
        )
        return None
    return StoreClient(settings.client_config())


def local_storage(args: argparse.Namespace, settings: Settings) -> LocalStorage:
    return LocalStorage(args.local_storage or settings.LOCAL_STORAGE_PATH)


def build_manager(
    collection: str, store: StoreClient | None, storage: LocalStorage
) -> CollectionManager:
    if collection == "posts":
        return PostsManager(storage)
    if collection == "producers":
        return ProducersManager(store)
    if collection == "animals":
        return AnimalsManager(store)
    return SiteImagesManager(store)


def parse_assignments(assignments: list[str] | None) -> dict[str, str]:
    """Parse FIELD=VALUE pairs.

    Raises:
        ValueError: If a pair has no '='
    """
    values: dict[str, str] = {}
    for assignment in assignments or []:
        key, sep, value = assignment.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected FIELD=VALUE, got {assignment!r}")
        values[key.strip()] = value
    return values


def describe_post(post: Post) -> str:
    return (
        f"{post.id}  [{category_label(post.category)}] {post.title} "
        f"by {post.author} - {post.read_time or '?'} min read - {post.status}"
    )


def describe_producer(producer: Producer) -> str:
    status = "Active" if producer.is_active else "Inactive"
    return (
        f"{producer.id}  {producer.name} ({producer.location}, {producer.country}) - "
        f"rating {producer.rating} ({producer.review_count}) - "
        f"{producer.animals_available} animals - {status}"
    )


def describe_animal(animal: Animal) -> str:
    producer = animal.producer.name if animal.producer else "Unknown Producer"
    status = "Available" if animal.is_available else "Adopted"
    return (
        f"{animal.id}  {animal.name} - {producer} - {animal.animal_type} {animal.breed} - "
        f"{animal.currency}{animal.price_per_year}/year - {status}"
    )


def describe_image(image: SiteImage) -> str:
    status = "Active" if image.is_active else "Inactive"
    return (
        f"  {image.id}  {image.section}: {image.description or 'No description'} - "
        f"{status} - {image.image_url}"
    )


def list_records(args: argparse.Namespace) -> int:
    """Execute the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    settings = get_settings()

    store = None
    if args.collection != "posts":
        store = open_store(settings)
        if store is None:
            return 1

    try:
        manager = build_manager(args.collection, store, local_storage(args, settings))
        records = manager.load_all()

        if isinstance(manager, PostsManager):
            for post in records:
                logger.info(describe_post(post))
        elif isinstance(manager, ProducersManager):
            for producer in records:
                logger.info(describe_producer(producer))
        elif isinstance(manager, AnimalsManager):
            for animal in manager.filter_by_producer(args.producer):
                logger.info(describe_animal(animal))
        else:
            for page, images in manager.grouped_by_page().items():
                logger.info(page)
                for image in images:
                    logger.info(describe_image(image))

        stats = ", ".join(f"{key}: {value}" for key, value in manager.stats().items())
        logger.info(f"{args.collection.capitalize()} - {stats}")
        return 0

    except (ClientError, ManagerError) as e:
        logger.error(f"Failed to load {args.collection}: {e}")
        return 1
    finally:
        if store is not None:
            store.close()


def save_record(args: argparse.Namespace) -> int:
    """Execute the save command.

    Starts from the stored record's form (with --id) or the new-record
    defaults, applies the --set values, and saves the result.
    """
    setup_logging(args.verbose)
    settings = get_settings()

    try:
        assignments = parse_assignments(args.set)
    except ValueError as e:
        logger.error(str(e))
        return 1

    store = None
    if args.collection != "posts":
        store = open_store(settings)
        if store is None:
            return 1

    form_class = FORMS[args.collection]

    try:
        manager = build_manager(args.collection, store, local_storage(args, settings))
        if args.id:
            manager.load_all()
            form = form_class.to_form(manager.begin_edit(args.id))
        else:
            manager.begin_new()
            form = form_class.defaults()
        form.update(assignments)

        record = manager.save(form_class.from_form(form))
        action = "Updated" if args.id else "Created"
        logger.info(f"{action} {args.collection} record {record.id}")
        return 0

    except ManagerError as e:
        logger.error(f"Failed to save {args.collection} record: {e}")
        for error in getattr(e, "errors", []):
            logger.error(f"  - {error}")
        return 1
    except ClientError as e:
        logger.error(f"Failed to save {args.collection} record: {e}")
        for extra in (getattr(e, "details", None), getattr(e, "hint", None)):
            if extra:
                logger.error(f"  {extra}")
        return 1
    finally:
        if store is not None:
            store.close()


def delete_record(args: argparse.Namespace) -> int:
    """Execute the delete command."""
    setup_logging(args.verbose)
    settings = get_settings()

    store = None
    if args.collection != "posts":
        store = open_store(settings)
        if store is None:
            return 1

    try:
        manager = build_manager(args.collection, store, local_storage(args, settings))
        manager.delete(args.id)
        logger.info(f"Deleted {args.collection} record {args.id}")

        if args.collection == "producers":
            # The store cascades producer deletes to their animals.
            animals = AnimalsManager(store).load_all()
            logger.info(f"  Animals remaining: {len(animals)}")
        return 0

    except (ClientError, ManagerError) as e:
        logger.error(f"Failed to delete {args.collection} record {args.id}: {e}")
        return 1
    finally:
        if store is not None:
            store.close()


def show_sections(args: argparse.Namespace) -> int:
    """Execute the sections command."""
    setup_logging(args.verbose)

    if args.page not in PAGES:
        logger.warning(f"Page {args.page!r} has no registered sections")

    for value, label in section_options(args.page):
        logger.info(f"{value}\t{label}")
    return 0


def recount(args: argparse.Namespace) -> int:
    """Execute the recount command."""
    setup_logging(args.verbose)

    store = open_store(get_settings())
    if store is None:
        return 1

    try:
        with store:
            maintainer = ProducerCounterMaintainer(store, reset_stale=not args.keep_stale)
            counts = maintainer.recompute()
        for producer_id, count in counts.items():
            logger.info(f"{producer_id}: {count} available")
        return 0

    except ClientError as e:
        logger.error(f"Failed to recount producer animals: {e}")
        return 1


def export_posts(args: argparse.Namespace) -> int:
    """Execute the export-posts command."""
    setup_logging(args.verbose)
    settings = get_settings()

    try:
        manager = PostsManager(local_storage(args, settings))
        manager.load_all()
        path = manager.export_to(args.output)
        logger.info(f"Exported {len(manager.items)} posts to {path}")
        return 0

    except (ManagerError, OSError) as e:
        logger.error(f"Failed to export posts: {e}")
        return 1


def import_posts(args: argparse.Namespace) -> int:
    """Execute the import-posts command. Replaces all existing posts."""
    setup_logging(args.verbose)
    settings = get_settings()

    try:
        manager = PostsManager(local_storage(args, settings))
        count = manager.import_file(args.file)
        logger.info(f"Imported {count} posts")
        return 0

    except ManagerError as e:
        logger.error(f"Failed to import posts: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="craft-cms",
        description="Manage posts, producers, animals and site images for the craft club site",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--local-storage",
        type=Path,
        default=None,
        help="Local storage file holding posts (default: CRAFT_CMS_LOCAL_STORAGE_PATH)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List the records of a collection",
    )
    list_parser.add_argument("collection", choices=COLLECTION_CHOICES)
    list_parser.add_argument(
        "--producer",
        default=None,
        help="Only list animals of this producer id",
    )
    list_parser.set_defaults(func=list_records)

    save_parser = subparsers.add_parser(
        "save",
        help="Create a record, or update one with --id",
        description="Create or update a record from FIELD=VALUE form values. Site images take page, section (a registered section or 'custom') and section_custom.",
    )
    save_parser.add_argument("collection", choices=COLLECTION_CHOICES)
    save_parser.add_argument(
        "--id",
        default=None,
        help="Id of the record to update",
    )
    save_parser.add_argument(
        "--set",
        action="append",
        metavar="FIELD=VALUE",
        help="Form value to set (repeatable)",
    )
    save_parser.set_defaults(func=save_record)

    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete a record",
    )
    delete_parser.add_argument("collection", choices=COLLECTION_CHOICES)
    delete_parser.add_argument("id", help="Id of the record to delete")
    delete_parser.set_defaults(func=delete_record)

    sections_parser = subparsers.add_parser(
        "sections",
        help="Show the image sections registered for a page",
    )
    sections_parser.add_argument("page", help=f"Page identifier ({', '.join(PAGES)})")
    sections_parser.set_defaults(func=show_sections)

    recount_parser = subparsers.add_parser(
        "recount",
        help="Recompute producers' available animal counts",
    )
    recount_parser.add_argument(
        "--keep-stale",
        action="store_true",
        help="Only update producers that have available animals",
    )
    recount_parser.set_defaults(func=recount)

    export_parser = subparsers.add_parser(
        "export-posts",
        help="Export posts as a JSON file",
    )
    export_parser.add_argument(
        "--output",
        type=Path,
        default=Path("."),
        help="Output file or directory (default: current directory)",
    )
    export_parser.set_defaults(func=export_posts)

    import_parser = subparsers.add_parser(
        "import-posts",
        help="Replace all posts with those in a JSON file",
    )
    import_parser.add_argument("file", type=Path, help="JSON file holding a posts array")
    import_parser.set_defaults(func=import_posts)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
