from valueset.configparser import BoolParam, ValuesetConfigParser, _create_default_config


def add_basic_configvars(config: ValuesetConfigParser) -> None:
    config.add(
        "check_index_validity",
        BoolParam(
            True,
            doc=(
                "If True, iterators and SetIndex objects raise InvalidIndexError "
                "when their set was mutated after they were created. If False the "
                "check is skipped and stale positions give unspecified results."
            ),
        ),
    )


config = _create_default_config()
add_basic_configvars(config)
config.check_unused_flags()
