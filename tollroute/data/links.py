"""Official purchase and information portals per country."""

OFFICIAL_LINKS: dict[str, str] = {
    "AT": "https://shop.asfinag.at/en/",
    "CZ": "https://edalnice.cz/en/",
    "SK": "https://eznamka.sk/en/",
    "HU": "https://nemzetiutdij.hu/en",
    "SI": "https://evinjeta.dars.si/en",
    "CH": "https://via.admin.ch/shop/",
    "RO": "https://www.roviniete.ro/en/",
    "BG": "https://web.bgtoll.bg/en/",
    "DE": "https://www.umwelt-plakette.de/en/",
    "FR": "https://www.certificat-air.gouv.fr/en/",
    "GB": "https://tfl.gov.uk/modes/driving/",
    "HR": "https://hac.hr/en",
    "RS": "https://www.putevi-srbije.rs/index.php/en/",
    "PL": "https://etoll.gov.pl/en/",
    "PT": "https://www.portugaltolls.com/",
    "IE": "https://www.eflow.ie/",
    "TR": "https://www.kgm.gov.tr/",
}

HEAVY_VEHICLE_TOLL_LINKS: dict[str, str] = {
    "AT": "https://www.go-maut.at/en/",
    "DE": "https://www.toll-collect.de/en/",
    "CH": "https://www.bazg.admin.ch/bazg/en/home/information-companies/transport--travel-documents--tolls/heavy-vehicle-charge.html",
    "HU": "https://www.hu-go.hu/",
    "CZ": "https://www.mytocz.eu/en",
    "SK": "https://www.emyto.sk/en",
    "SI": "https://www.darsgo.si/en",
    "PL": "https://etoll.gov.pl/en/",
}
