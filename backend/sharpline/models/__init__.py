from sharpline.models.pick import H2H_MARKET, Pick, PickStatus

__all__ = ["Pick", "PickStatus", "H2H_MARKET"]
