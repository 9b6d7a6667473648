"""Checkerboard assay protocol document."""
from platecrafter.engine.formatting import unit_symbol
from platecrafter.models import CheckerboardRequest

PROTOCOL_TEMPLATE = """
Method Protocol: Drug Combination Study by Checkerboard Assay
Protocol adapted from: Bellio, P., Fagnani, L., Nazzicone, L., & Celenza, G. (2021). New and simplified method for drug combination studies by checkerboard assay. MethodsX, 8, 101543. https://doi.org/10.1016/j.mex.2021.101543

Required Stock Solutions:
- {drug_a} (Stock SA, 4x): Prepare a {stock_sa} {unit_a} solution in 2xCAMHB.
- {drug_a} (Stock 2xSA, 8x): Prepare a {stock_2xsa} {unit_a} solution in 2xCAMHB.
- {drug_b} (Stock SB, 4x): Prepare a {stock_sb} {unit_b} solution in 2xCAMHB.

Highest Final Concentrations:
- Drug A: {conc_a:g} {unit_a}
- Drug B: {conc_b:g} {unit_b}
- Dilution Factor: 1:{factor:g}

---

DAY 1: Preparation of Media, Stocks, and Inoculum

1. Preparation of Culture Media:
   - Prepare Mueller-Hinton Broth (MHB) and 2x concentrated Cation-adjusted Mueller-Hinton Broth (2xCAMHB) according to manufacturer instructions.
   - Sterilize by autoclaving at 121°C for 15 minutes.

2. Preparation of Microbial Inoculum:
   - Inoculate a single colony of the test microorganism into 10 mL of MHB.
   - Grow at 35±2°C in a shaker incubator (approx. 200 rpm) for 18±2 hours. This should yield a culture of ~10⁸ CFU/mL.

3. Preparation of Drug Stock Solutions:
   - Prepare the 4x and 8x stock solutions for Drug A and Drug B as specified in the "Required Stock Solutions" section above using 2xCAMHB as the diluent.
   - You will need at least 1.5 mL of Stock SA, 500 µL of Stock 2xSA, and 1.0 mL of Stock SB.

---

DAY 2: Plate Preparation and Dilutions

1. Initial Plate Setup:
   - This protocol results in a final volume of 200 µL per well.
   - All wells initially contain 50 µL of 2xCAMHB medium.
   - 50 µL of Drug A solution is added.
   - 50 µL of Drug B solution is added.
   - 50 µL of inoculum is added.

2. Preparation and Dispensing of {drug_a}:
   - Dispense 100 µL of the 4x stock (Stock SA) of {drug_a} into each well of row A, columns 1-11.
   - Dispense 100 µL of the 8x stock (Stock 2xSA) of {drug_a} into well A12.

3. First Serial Dilution ({drug_a}):
   - Using a multichannel pipette set to 100 µL, perform a 1:{factor:g} serial dilution of {drug_a} by transferring from row A to row B, then B to C, and so on, down to row G.
   - Mix thoroughly by pipetting up and down in each row before transferring to the next.
   - Discard 100 µL from row G after the final mix. Row H will contain no {drug_a}.

4. Preparation and Dispensing of {drug_b}:
   - Dispense 100 µL of the 4x stock (Stock SB) of {drug_b} into each well of column 12 (rows A-H).

5. Second Serial Dilution ({drug_b}):
   - Using a multichannel pipette set to 100 µL, perform a 1:{factor:g} serial dilution of {drug_b} by transferring from column 12 to column 11, then 11 to 10, and so on, across to column 2.
   - Mix thoroughly by pipetting up and down in each column before transferring to the next.
   - Discard 100 µL from column 2 after the final mix. Column 1 will contain no {drug_b}.

6. Plate Inoculation:
   - Prepare a bacterial inoculum of 10⁶ CFU/mL in 0.9% NaCl from the Day 1 culture.
   - Using a multichannel pipette, dispense 100 µL of this final inoculum into each well of the microplate.
   - The final inoculum concentration in each well will be 5 x 10⁵ CFU/mL.
   - Note: It is recommended to prepare a parallel "mirror plate" with all reagents but without bacteria to serve as a background/no-growth control.

7. Plate Incubation:
   - Cover the plate and place it in a static incubator at 35±2°C for 18±2 hours.
   - A tray with water can be added to the incubator to prevent evaporation.

---

DAY 3: Analysis

1. Optical Density Reading:
   - After incubation, mix the contents of the wells with a multichannel pipette.
   - Read the optical density (OD) of the plate at 600 nm (or a similar wavelength) using a microplate reader.

2. Data Analysis:
   - Calculate the percentage of growth for each well using the formula:
     Growth % = [(OD_combination_well - OD_background) / (OD_drug_free_well - OD_background)] x 100
   - OD_drug_free_well: Well H1 (growth control).
   - OD_background: A blank well or the corresponding well from the mirror plate.
   - The Minimal Inhibitory Concentration (MIC) can be determined as the lowest drug concentration that reduces bacterial growth by a defined threshold (e.g., >80%).
"""


def generate_protocol_text(request: CheckerboardRequest) -> str:
    """
    Fill the checkerboard protocol template.

    Stock solutions are 4x (SA, SB) and 8x (2xSA) the highest final
    concentrations, in the units the concentrations were entered in.
    """
    return PROTOCOL_TEMPLATE.format(
        drug_a=request.drug_a,
        drug_b=request.drug_b,
        conc_a=request.conc_a,
        conc_b=request.conc_b,
        unit_a=unit_symbol(request.unit_a),
        unit_b=unit_symbol(request.unit_b),
        stock_sa=f"{request.conc_a * 4:.2f}",
        stock_2xsa=f"{request.conc_a * 8:.2f}",
        stock_sb=f"{request.conc_b * 4:.2f}",
        factor=request.factor,
    ).strip()
