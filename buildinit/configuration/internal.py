from buildinit.configuration.file import ConfigEntry, LegacyConfigEntry, YamlConfigEntry


class Init(object):
    SECTION = "init"

    ENABLE_BUILDPACKS = ConfigEntry(
        LegacyConfigEntry(SECTION, "enable_buildpacks", bool), YamlConfigEntry("init.enableBuildpacks")
    )
    """
    Whether directories without a Dockerfile but with a well known project file should get a buildpacks builder.
    """

    ENABLE_KO = ConfigEntry(LegacyConfigEntry(SECTION, "enable_ko", bool), YamlConfigEntry("init.enableKo"))

    BUILDPACKS_BUILDER = ConfigEntry(
        LegacyConfigEntry(SECTION, "buildpacks_builder"), YamlConfigEntry("init.buildpacksBuilder")
    )
    """
    The builder image handed to buildpacks artifacts.
    """

    OUTPUT = ConfigEntry(LegacyConfigEntry(SECTION, "output"), YamlConfigEntry("init.output"))

    FORCE = ConfigEntry(LegacyConfigEntry(SECTION, "force", bool), YamlConfigEntry("init.force"))
    """
    Skip the builders and images that cannot be paired instead of failing.
    """

    SKIP_DIRS = ConfigEntry(LegacyConfigEntry(SECTION, "skip_dirs", list), YamlConfigEntry("init.skipDirs"))
    """
    Comma-delimited list of extra directory names that discovery never walks into.
    """
