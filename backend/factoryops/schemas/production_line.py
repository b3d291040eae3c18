from factoryops.schemas.machine import ProductionLineInfo, MachineSummary, MachineWithAnnotations


class ProductionLineResponse(ProductionLineInfo):
    machines: list[MachineSummary] = []


class ProductionLineDetail(ProductionLineInfo):
    machines: list[MachineWithAnnotations] = []
