from data_designer.plugins.plugin import Plugin, PluginType

slop_miner_plugin = Plugin(
    config_qualified_name="data_designer_slop_miner.config.SlopMinerColumnConfig",
    impl_qualified_name="data_designer_slop_miner.generator.SlopMinerColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
