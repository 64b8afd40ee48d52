SATA_SSD = """
smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0] (local build)
=== START OF INFORMATION SECTION ===
Device Model:     Samsung SSD 860 EVO 500GB
Serial Number:    S3Z1NB0K123456A
Rotation Rate:    Solid State Device
SMART overall-health self-assessment test result: PASSED

ID# ATTRIBUTE_NAME          FLAG     VALUE WORST THRESH TYPE      UPDATED  WHEN_FAILED RAW_VALUE
  5 Reallocated_Sector_Ct   0x0033   100   100   010    Pre-fail  Always       -       2
  9 Power_On_Hours          0x0032   095   095   000    Old_age   Always       -       21543
177 Wear_Leveling_Count     0x0013   {wear:03d}   {wear:03d}   000    Pre-fail  Always       -       45
"""

SSD_WITHOUT_WEAR = """
Device Model:     Generic SSD 256GB
Rotation Rate:    Solid State Device
ID# ATTRIBUTE_NAME          FLAG     VALUE WORST THRESH TYPE      UPDATED  WHEN_FAILED RAW_VALUE
  9 Power_On_Hours          0x0032   095   095   000    Old_age   Always       -       21543
"""

NVME = """
smartctl 7.5 2025-04-30 r5714 [x86_64-linux-6.17.7] (local build)
=== START OF INFORMATION SECTION ===
Model Number:                       Samsung SSD 970 EVO Plus 1TB
Serial Number:                      S4EWNX0R123456
=== START OF SMART DATA SECTION ===
SMART overall-health self-assessment test result: PASSED

SMART/Health Information (NVMe Log 0x02)
Critical Warning:                   0x00
Temperature:                        29 Celsius
Available Spare:                    100%
Available Spare Threshold:          10%
Percentage Used:                    {used}%
Power On Hours:                     41
"""

HDD = """
=== START OF INFORMATION SECTION ===
Device Model:     WDC WD10EZEX-08WN4A0
Rotation Rate:    7200 rpm
ID# ATTRIBUTE_NAME          FLAG     VALUE WORST THRESH TYPE      UPDATED  WHEN_FAILED RAW_VALUE
  5 Reallocated_Sector_Ct   0x0033   200   200   140    Pre-fail  Always       -       {reallocated}
  9 Power_On_Hours          0x0032   064   064   000    Old_age   Always       -       26714
197 Current_Pending_Sector  0x0032   200   200   000    Old_age   Always       -       {pending}
198 Offline_Uncorrectable   0x0030   100   253   000    Old_age   Offline      -       {offline}
"""


def sata_ssd(wear):
    return SATA_SSD.format(wear=wear)


def nvme(used):
    return NVME.format(used=used)


def hdd(reallocated=0, pending=0, offline=0):
    return HDD.format(reallocated=reallocated, pending=pending, offline=offline)
